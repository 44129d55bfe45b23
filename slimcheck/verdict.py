"""Finding aggregator: tallies counts and derives the exit status."""

from dataclasses import dataclass
from typing import Iterable

from .rules.base import Finding, Severity

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_WARNINGS = 2


@dataclass(frozen=True)
class Verdict:
    """Result of one run. INFO findings (including passes) are never counted."""

    findings: tuple[Finding, ...] = ()
    error_count: int = 0
    warning_count: int = 0

    @property
    def exit_status(self) -> int:
        if self.error_count > 0:
            return EXIT_ERRORS
        if self.warning_count > 0:
            return EXIT_WARNINGS
        return EXIT_OK


def tally(findings: Iterable[Finding]) -> Verdict:
    """Single pass over the findings, order preserved."""
    kept: list[Finding] = []
    errors = warnings = 0
    for f in findings:
        kept.append(f)
        if f.passed:
            continue
        if f.severity == Severity.ERROR:
            errors += 1
        elif f.severity == Severity.WARNING:
            warnings += 1
    return Verdict(findings=tuple(kept), error_count=errors, warning_count=warnings)
