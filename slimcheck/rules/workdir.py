"""Rule: WORKDIR should be set instead of 'RUN cd'."""

from typing import Iterator

from ..models import BuildScript, ExclusionClassification, Keyword, SharedFacts
from .base import Finding, Severity, passed

SECTION = 2


def check(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    if script.has(Keyword.WORKDIR):
        yield passed("workdir_missing", SECTION, "WORKDIR is set.")
        return
    yield Finding(
        rule_id="workdir_missing",
        severity=Severity.WARNING,
        message="No WORKDIR instruction. Use WORKDIR rather than 'RUN cd' to organize the file layout.",
        section=SECTION,
    )
