"""Rule: downloads and installs should be followed by temp/cache cleanup."""

import re
from typing import Iterator

from ..models import BuildScript, ExclusionClassification, SharedFacts
from .base import Finding, Severity, passed

SECTION = 4


def _removes_temp(text: str, patterns) -> bool:
    return any(re.search(rf"\brm\s.*?{p}", text) for p in patterns)


def check(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Only build-time commands count; a HEALTHCHECK curl runs in the container."""
    config = facts.config
    build_commands = [c for c in facts.commands if c.runs_at_build]
    fetching = [c for c in build_commands if any(ind in c.text for ind in config.fetch_indicators)]
    cleaned = any(_removes_temp(c.text, config.temp_cleanup_patterns) for c in build_commands)
    if fetching and not cleaned:
        yield Finding(
            rule_id="temp_file_cleanup",
            severity=Severity.WARNING,
            message="Downloads or installs found but no cleanup of temporary or cache files.",
            line_refs=tuple(c.line_number for c in fetching),
            section=SECTION,
            tip="For example: && rm -rf /tmp/* /var/tmp/* ~/.cache",
        )
        return
    yield passed("temp_file_cleanup", SECTION, "Temporary file cleanup present or not needed.")
