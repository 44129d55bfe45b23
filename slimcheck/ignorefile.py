"""Exclusion validator: classifies .dockerignore content and its pattern coverage."""

import logging

from .config import Config
from .models import ExclusionClassification, ExclusionState
from .parser import BOM

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"


def effective_rules(content: str) -> list[str]:
    """Non-blank, non-comment lines, stripped."""
    rules = []
    for line in content.splitlines():
        line = line.strip()
        if line and not line.startswith(COMMENT_MARKER):
            rules.append(line)
    return rules


def _missing(catalog: dict[str, str], rules: list[str]) -> tuple[str, ...]:
    """Names whose pattern is not a substring of any rule. Catalog order is kept."""
    return tuple(name for name, pattern in catalog.items() if not any(pattern in rule for rule in rules))


def classify_exclusions(content: str | None, config: Config | None = None, path: str = "") -> ExclusionClassification:
    """Classify the exclusion file.

    ``None`` means the file does not exist; an empty string means it exists
    but holds nothing. Coverage is only computed for SUFFICIENT files.
    """
    config = config or Config()
    if content is None:
        return ExclusionClassification(state=ExclusionState.ABSENT, path=path)
    content = content.lstrip(BOM)
    if not content.strip():
        return ExclusionClassification(state=ExclusionState.EMPTY, path=path)

    rules = effective_rules(content)
    count = len(rules)
    if count == 0:
        state = ExclusionState.COMMENT_ONLY
    elif count < config.min_exclusion_rules:
        state = ExclusionState.INSUFFICIENT
    else:
        state = ExclusionState.SUFFICIENT

    if state != ExclusionState.SUFFICIENT:
        logger.debug("Exclusion file %s: %s (%d rules)", path, state.value, count)
        return ExclusionClassification(state=state, effective_rule_count=count, rules=tuple(rules), path=path)

    missing_critical = _missing(config.critical_exclusions, rules)
    missing_advisory = _missing(config.advisory_exclusions, rules)
    logger.debug(
        "Exclusion file %s: %d rules, missing critical=%s advisory=%s",
        path, count, missing_critical, missing_advisory,
    )
    return ExclusionClassification(
        state=state,
        effective_rule_count=count,
        missing_critical=missing_critical,
        missing_advisory=missing_advisory,
        rules=tuple(rules),
        path=path,
    )
