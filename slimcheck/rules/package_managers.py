"""Rules: package-manager hygiene. A family is only evaluated when it is invoked at all."""

import re
from typing import Iterator

from ..config import PackageManager
from ..models import BuildScript, Command, ExclusionClassification, SharedFacts
from .base import Finding, Severity, passed

SECTION = 3


def _commands(facts: SharedFacts, pm: PackageManager) -> list[Command]:
    lines = set(facts.families.get(pm.name, ()))
    return [c for c in facts.commands if c.line_number in lines]


def _installs(facts: SharedFacts, pm: PackageManager) -> list[Command]:
    return [c for c in _commands(facts, pm) if re.search(pm.install, c.text)]


def _present(facts: SharedFacts) -> list[PackageManager]:
    return [pm for pm in facts.config.package_managers if facts.families.get(pm.name)]


def check_install_recommends(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Installs for families with a 'skip recommended packages' flag must pass it."""
    for pm in _present(facts):
        if not pm.no_recommends:
            continue
        offending = [c.line_number for c in _installs(facts, pm) if pm.no_recommends not in c.text]
        if offending:
            yield Finding(
                rule_id="install_recommends",
                severity=Severity.WARNING,
                message=(
                    f"{pm.name} install without {pm.no_recommends}; recommended packages "
                    "will be pulled in and enlarge the image."
                ),
                line_refs=tuple(offending),
                section=SECTION,
            )


def check_cache_cleanup(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Every family that installs needs one of its cache-clearing idioms somewhere."""
    present = _present(facts)
    if not present:
        yield passed("package_cache_cleanup", SECTION, "No package manager operations detected.")
        return
    for pm in present:
        installs = _installs(facts, pm)
        if not installs:
            continue
        if any(re.search(p, c.text) for p in pm.cleanup for c in facts.commands):
            continue
        yield Finding(
            rule_id="package_cache_cleanup",
            severity=Severity.WARNING,
            message=f"{pm.name} installs packages but its cache is never cleaned.",
            line_refs=tuple(c.line_number for c in installs),
            section=SECTION,
            tip=_cleanup_tip(pm),
        )


def _cleanup_tip(pm: PackageManager) -> str | None:
    tips = {
        "apt": "In the same RUN: && apt-get clean && rm -rf /var/lib/apt/lists/*",
        "yum": "In the same RUN: && yum clean all",
        "dnf": "In the same RUN: && dnf clean all",
        "apk": "Use apk add --no-cache, or remove temporary dependencies with apk del",
    }
    return tips.get(pm.name)


def check_update_install_split(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Index refresh and install belong in one RUN, or the cached index goes stale."""
    for pm in _present(facts):
        if not pm.update:
            continue
        # an index refresh on its own line need not match the family's detect pattern
        updates = [c for c in facts.commands if c.runs_at_build and re.search(pm.update, c.text)]
        installs = _installs(facts, pm)
        if not updates or not installs:
            continue
        if any(c in installs for c in updates):
            continue
        lines = sorted({c.line_number for c in updates + installs})
        yield Finding(
            rule_id="update_install_split",
            severity=Severity.WARNING,
            message=f"{pm.name} index update and install are in separate instructions; combine them into one RUN.",
            line_refs=tuple(lines),
            section=SECTION,
        )


def check_apk_virtual(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Build-only apk packages are easier to drop when grouped under --virtual."""
    for pm in _present(facts):
        if pm.name != "apk":
            continue
        offending = [
            c.line_number for c in _installs(facts, pm)
            if "--virtual" not in c.text and re.search(facts.config.apk_build_deps, c.text)
        ]
        if offending:
            yield Finding(
                rule_id="apk_virtual_deps",
                severity=Severity.INFO,
                message="Build dependencies installed with apk add; group them with --virtual so they can be removed later.",
                line_refs=tuple(offending),
                section=SECTION,
            )
