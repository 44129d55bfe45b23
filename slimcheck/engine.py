"""Rule engine: runs the fixed rule catalog over a parsed build script."""

import logging
import re
from typing import Iterable, Iterator

from .config import Config
from .ignorefile import classify_exclusions
from .models import BuildScript, ExclusionClassification, Keyword, SharedFacts
from .parser import parse_build_script
from .rules.base import Finding, Rule
from .rules import (
    add_vs_copy,
    base_image,
    copy_usage,
    custom,
    exclusion_file,
    malformed,
    metadata,
    multi_stage,
    package_managers,
    root_user,
    run_count,
    temp_files,
    workdir,
)
from .verdict import Verdict, tally

logger = logging.getLogger(__name__)

# Execution order is report order.
CATALOG: tuple[Rule, ...] = (
    Rule("exclusion_file", exclusion_file.check_state),
    Rule("exclusion_coverage", exclusion_file.check_coverage),
    Rule("base_image_weight", base_image.check_weight),
    Rule("base_image_tag", base_image.check_tag),
    Rule("workdir_missing", workdir.check),
    Rule("install_recommends", package_managers.check_install_recommends),
    Rule("package_cache_cleanup", package_managers.check_cache_cleanup),
    Rule("update_install_split", package_managers.check_update_install_split),
    Rule("apk_virtual_deps", package_managers.check_apk_virtual),
    Rule("temp_file_cleanup", temp_files.check),
    Rule("run_count", run_count.check),
    Rule("multi_stage", multi_stage.check),
    Rule("copy_whole_context", copy_usage.check_whole_context),
    Rule("copy_unnecessary_files", copy_usage.check_unnecessary_files),
    Rule("label_missing", metadata.check_label),
    Rule("expose_missing", metadata.check_expose),
    Rule("healthcheck_missing", metadata.check_healthcheck),
    Rule("root_user", root_user.check),
    Rule("add_instead_of_copy", add_vs_copy.check),
    Rule("unparsed_line", malformed.check),
)


def derive_facts(script: BuildScript, config: Config) -> SharedFacts:
    """Compute facts several rules share, once per run."""
    commands = tuple(script.commands())
    families: dict[str, tuple[int, ...]] = {}
    for pm in config.package_managers:
        lines = tuple(
            c.line_number for c in commands
            if c.runs_at_build and re.search(pm.detect, c.text)
        )
        if lines:
            families[pm.name] = lines
    return SharedFacts(
        config=config,
        commands=commands,
        run_count=len(script.of(Keyword.RUN)),
        stage_count=len(script.stages),
        families=families,
    )


def run_rules(script: BuildScript, exclusions: ExclusionClassification, config: Config | None = None) -> Iterator[Finding]:
    """Yield findings of every enabled rule, in catalog order, then custom rules."""
    config = config or Config()
    facts = derive_facts(script, config)
    logger.debug("Package manager families present: %s", sorted(facts.families) or "none")
    for rule in CATALOG:
        if rule.rule_id in config.disabled_rules:
            logger.debug("Rule %s disabled", rule.rule_id)
            continue
        yield from rule.check(script, exclusions, facts)
    yield from custom.run_custom_rules(script, exclusions, facts)


def analyze(
    lines: Iterable[str],
    exclusion_content: str | None,
    config: Config | None = None,
    path: str = "",
    exclusion_path: str = "",
) -> tuple[BuildScript, ExclusionClassification, Verdict]:
    """Parse, classify, run rules, tally. One isolated run."""
    config = config or Config()
    script = parse_build_script(lines, path=path)
    exclusions = classify_exclusions(exclusion_content, config, path=exclusion_path)
    verdict = tally(run_rules(script, exclusions, config))
    logger.debug(
        "%s: %d errors, %d warnings, exit %d",
        path or "<lines>", verdict.error_count, verdict.warning_count, verdict.exit_status,
    )
    return script, exclusions, verdict
