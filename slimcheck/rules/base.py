"""Base types for rules."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from ..models import BuildScript, ExclusionClassification, SharedFacts


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


# Report sections, in catalog order. 0 is the exclusion-file section.
SECTIONS = {
    0: ".dockerignore file",
    1: "Base image",
    2: "WORKDIR",
    3: "Package manager cache",
    4: "Temporary file cleanup",
    5: "RUN layer count",
    6: "Multi-stage build",
    7: "COPY/ADD usage",
    8: "Image metadata",
    9: "Port exposure",
    10: "Health check",
    11: "User privileges",
    12: "ADD vs COPY",
}


@dataclass(frozen=True)
class Finding:
    """Output of a single rule check."""

    rule_id: str
    severity: Severity
    message: str
    line_refs: tuple[int, ...] = ()
    section: int = 0
    tip: Optional[str] = None
    passed: bool = False  # success note; always INFO, never counted


CheckFn = Callable[[BuildScript, ExclusionClassification, SharedFacts], Iterable[Finding]]


@dataclass(frozen=True)
class Rule:
    """Catalog entry: stable id and check function."""

    rule_id: str
    check: CheckFn


def passed(rule_id: str, section: int, message: str) -> Finding:
    return Finding(rule_id=rule_id, severity=Severity.INFO, message=message, section=section, passed=True)
