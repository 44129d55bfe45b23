"""Custom rules declared in .slimcheck.yaml: regex over instruction lines."""

import re
from typing import Iterator

from ..config import CustomRule
from ..models import BuildScript, ExclusionClassification, Keyword, SharedFacts
from ..parser import keyword_for
from .base import Finding, Severity

SECTION = 14


def _keyword(rule: CustomRule) -> Keyword | None:
    """Accepts either Dockerfile spelling (FROM) or model spelling (BASE_IMAGE)."""
    if not rule.keyword:
        return None
    if rule.keyword in Keyword.__members__:
        return Keyword[rule.keyword]
    return keyword_for(rule.keyword)


def _match(rule: CustomRule, script: BuildScript) -> list[int]:
    keyword = _keyword(rule)
    pattern = re.compile(rule.pattern)
    return [
        i.line_number for i in script
        if (keyword is None or i.keyword == keyword) and pattern.search(i.raw)
    ]


def run_custom_rules(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """One finding per matching instruction, rules in declaration order."""
    disabled = facts.config.disabled_rules
    for rule in facts.config.custom_rules:
        if rule.rule_id in disabled:
            continue
        for line in _match(rule, script):
            yield Finding(
                rule_id=rule.rule_id,
                severity=Severity(rule.severity),
                message=rule.message,
                line_refs=(line,),
                section=SECTION,
            )
