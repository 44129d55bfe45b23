"""Rule: lines that did not parse as build instructions."""

from typing import Iterator

from ..models import BuildScript, ExclusionClassification, SharedFacts
from .base import Finding, Severity

SECTION = 13


def check(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    lines = [i.line_number for i in script if i.malformed]
    if lines:
        yield Finding(
            rule_id="unparsed_line",
            severity=Severity.INFO,
            message=f"{len(lines)} line(s) are not recognized build instructions; keyword checks ignore them.",
            line_refs=tuple(lines),
            section=SECTION,
        )
