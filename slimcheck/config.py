"""Tunable thresholds and pattern catalogs, optionally loaded from YAML."""

import logging
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".slimcheck.yaml"


@dataclass(frozen=True)
class PackageManager:
    """One package-manager family. All patterns are regular expressions."""

    name: str
    detect: str
    install: str
    update: Optional[str] = None
    cleanup: tuple[str, ...] = ()
    no_recommends: Optional[str] = None  # flag that skips recommended packages (apt only)


@dataclass(frozen=True)
class CustomRule:
    """User-declared rule: regex over instruction lines."""

    rule_id: str
    severity: str
    pattern: str
    message: str
    keyword: Optional[str] = None


DEFAULT_PACKAGE_MANAGERS = (
    PackageManager(
        name="apt",
        detect=r"\bapt-get\b",
        install=r"apt-get\s+(?:-\S+\s+)*install\b",
        update=r"apt-get\s+(?:-\S+\s+)*update\b",
        cleanup=(r"rm\s+-(?:rf|fr)\s+/var/lib/apt/lists",),
        no_recommends="--no-install-recommends",
    ),
    PackageManager(
        name="yum",
        detect=r"\byum\b",
        install=r"\byum\s+(?:-\S+\s+)*install\b",
        cleanup=(r"\byum\s+clean\s+all", r"rm\s+-(?:rf|fr)\s+/var/cache/yum"),
    ),
    PackageManager(
        name="dnf",
        detect=r"\bdnf\b",
        install=r"\bdnf\s+(?:-\S+\s+)*install\b",
        cleanup=(r"\bdnf\s+clean\s+all", r"rm\s+-(?:rf|fr)\s+/var/cache/dnf"),
    ),
    PackageManager(
        name="apk",
        detect=r"\bapk\s+add\b",
        install=r"\bapk\s+add\b",
        update=r"\bapk\s+update\b",
        cleanup=(r"--no-cache", r"\bapk\s+del\b"),
    ),
)


@dataclass(frozen=True)
class Config:
    """Sensitivity knobs. Catalogs are data; rules never hardcode them."""

    run_threshold: int = 5
    min_exclusion_rules: int = 3

    # name -> substring looked up in each .dockerignore line
    critical_exclusions: dict[str, str] = field(default_factory=lambda: {
        "version-control": ".git",
        "node-modules": "node_modules",
    })
    advisory_exclusions: dict[str, str] = field(default_factory=lambda: {
        "build-output": "target/",
        "python-bytecode": "__pycache__/",
        "coverage": "coverage/",
        "logs": "*.log",
        "env-files": ".env",
        "markdown": "*.md",
        "docs": "docs/",
        "test-dir": "test/",
        "tests-dir": "tests/",
        "spec-dir": "spec/",
    })

    lightweight_markers: tuple[str, ...] = ("alpine", "slim", "scratch", "distroless")
    # family name -> regex matched against the base image reference
    heavy_distributions: dict[str, str] = field(default_factory=lambda: {
        "ubuntu": r"ubuntu",
        "debian": r"debian",
        "centos": r"centos",
        "fedora": r"fedora",
    })
    treat_untagged_as_latest: bool = False

    package_managers: tuple[PackageManager, ...] = DEFAULT_PACKAGE_MANAGERS
    apk_build_deps: str = r"\b(?:gcc|make|build-base|build)\b"

    fetch_indicators: tuple[str, ...] = ("wget", "curl", "pip install", "npm install")
    temp_cleanup_patterns: tuple[str, ...] = (r"/tmp/", r"/var/tmp/", r"\.tmp", r"\.log", r"cache")
    build_tool_patterns: tuple[str, ...] = (
        r"gcc", r"make", r"build-essential", r"npm install", r"pip install.*-r",
        r"go build", r"mvn", r"gradle",
    )
    unnecessary_copy_patterns: tuple[str, ...] = (".md", "test/", "tests/", "spec/", "docs/", "README", "LICENSE")

    disabled_rules: frozenset[str] = frozenset()
    custom_rules: tuple[CustomRule, ...] = ()

    def with_overrides(self, **changes: Any) -> "Config":
        """Copy with non-None overrides applied (CLI flags)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


_INT_KEYS = {"run_threshold", "min_exclusion_rules"}
_MAPPING_KEYS = {"critical_exclusions", "advisory_exclusions", "heavy_distributions"}
_LIST_KEYS = {
    "lightweight_markers", "fetch_indicators", "temp_cleanup_patterns",
    "build_tool_patterns", "unnecessary_copy_patterns",
}
_REGEX_KEYS = {"temp_cleanup_patterns", "build_tool_patterns"}


def find_config(context_dir: Path) -> Path | None:
    """Return .slimcheck.yaml in the build context, if any."""
    candidate = Path(context_dir) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Path | None) -> Config:
    """Load config from YAML. None -> defaults."""
    if path is None:
        return Config()
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    logger.debug("Loaded config from %s", path)
    return config_from_dict(data or {}, source=str(path))


def config_from_dict(data: Any, source: str = "<config>") -> Config:
    """Build a Config from a parsed mapping, validating types."""
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping")

    known = {f.name for f in fields(Config)}
    changes: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("%s: ignoring unknown config key '%s'", source, key)
            continue
        if key in _INT_KEYS:
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"{source}: '{key}' must be a non-negative integer")
            changes[key] = value
        elif key in _MAPPING_KEYS:
            if not isinstance(value, dict):
                raise ConfigError(f"{source}: '{key}' must be a mapping of name to pattern")
            changes[key] = {str(k): str(v) for k, v in value.items()}
            if key == "heavy_distributions":
                for pattern in changes[key].values():
                    _check_regex(pattern, key, source)
        elif key in _LIST_KEYS:
            items = _string_list(value, key, source)
            if key in _REGEX_KEYS:
                for item in items:
                    _check_regex(item, key, source)
            changes[key] = tuple(items)
        elif key == "treat_untagged_as_latest":
            if not isinstance(value, bool):
                raise ConfigError(f"{source}: '{key}' must be true or false")
            changes[key] = value
        elif key == "apk_build_deps":
            _check_regex(str(value), key, source)
            changes[key] = str(value)
        elif key == "disabled_rules":
            changes[key] = frozenset(_string_list(value, key, source))
        elif key == "package_managers":
            changes[key] = _package_managers(value, source)
        elif key == "custom_rules":
            changes[key] = _custom_rules(value, source)
    return Config(**changes)


def _string_list(value: Any, key: str, source: str) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{source}: '{key}' must be a list of strings")
    return [str(item) for item in value]


def _check_regex(pattern: str, key: str, source: str) -> None:
    try:
        re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"{source}: bad regex in '{key}': {pattern!r} ({e})") from e


def _package_managers(value: Any, source: str) -> tuple[PackageManager, ...]:
    if not isinstance(value, dict):
        raise ConfigError(f"{source}: 'package_managers' must be a mapping of family name to settings")
    families = []
    for name, settings in value.items():
        if not isinstance(settings, dict) or "detect" not in settings or "install" not in settings:
            raise ConfigError(f"{source}: package manager '{name}' needs 'detect' and 'install'")
        cleanup = settings.get("cleanup", [])
        if isinstance(cleanup, str):
            cleanup = [cleanup]
        pm = PackageManager(
            name=str(name),
            detect=str(settings["detect"]),
            install=str(settings["install"]),
            update=str(settings["update"]) if settings.get("update") else None,
            cleanup=tuple(str(c) for c in cleanup),
            no_recommends=str(settings["no_recommends"]) if settings.get("no_recommends") else None,
        )
        for pattern in (pm.detect, pm.install, pm.update, *pm.cleanup):
            if pattern:
                _check_regex(pattern, f"package_managers.{name}", source)
        families.append(pm)
    return tuple(families)


def _custom_rules(value: Any, source: str) -> tuple[CustomRule, ...]:
    if not isinstance(value, list):
        raise ConfigError(f"{source}: 'custom_rules' must be a list")
    rules = []
    for item in value:
        if not isinstance(item, dict) or "id" not in item or "pattern" not in item:
            raise ConfigError(f"{source}: each custom rule needs 'id' and 'pattern'")
        severity = str(item.get("severity", "WARNING")).upper()
        if severity not in ("ERROR", "WARNING", "INFO"):
            raise ConfigError(f"{source}: custom rule '{item['id']}' has unknown severity {severity}")
        _check_regex(str(item["pattern"]), f"custom_rules.{item['id']}", source)
        rules.append(CustomRule(
            rule_id=str(item["id"]),
            severity=severity,
            pattern=str(item["pattern"]),
            message=str(item.get("message", "Custom rule matched.")),
            keyword=str(item["keyword"]).upper() if item.get("keyword") else None,
        ))
    return tuple(rules)
