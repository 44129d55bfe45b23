"""Rule: too many RUN instructions means too many layers."""

from typing import Iterator

from ..models import BuildScript, ExclusionClassification, Keyword, SharedFacts
from .base import Finding, Severity, passed

SECTION = 5


def check(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    count = facts.run_count
    if count > facts.config.run_threshold:
        yield Finding(
            rule_id="run_count",
            severity=Severity.WARNING,
            message=(
                f"{count} RUN instructions found (threshold {facts.config.run_threshold}). "
                "Each adds a layer; chain related commands with &&."
            ),
            line_refs=tuple(i.line_number for i in script.of(Keyword.RUN)),
            section=SECTION,
            tip="RUN apt-get update && apt-get install -y pkg && apt-get clean",
        )
    elif count > 0:
        yield passed("run_count", SECTION, f"RUN instruction count is reasonable ({count}).")
