"""Rule: containers should not run as root. Exactly one outcome per run."""

from typing import Iterator

from ..models import BuildScript, ExclusionClassification, Instruction, Keyword, SharedFacts
from .base import Finding, Severity, passed

SECTION = 11

ROOT_USERS = {"root", "0"}


def is_root(instruction: Instruction) -> bool:
    args = instruction.arguments()
    if not args:
        return False
    user = args[0].split(":", 1)[0]
    return user.lower() in ROOT_USERS


def check(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    users = script.of(Keyword.USER)
    root_lines = [u.line_number for u in users if is_root(u)]
    if root_lines:
        yield Finding(
            rule_id="root_user",
            severity=Severity.ERROR,
            message="Explicit 'USER root'. Production images should run as a non-root user.",
            line_refs=tuple(root_lines),
            section=SECTION,
        )
    elif not users:
        yield Finding(
            rule_id="root_user",
            severity=Severity.WARNING,
            message="No USER instruction; the container will run as root. Create and switch to a non-root user.",
            section=SECTION,
        )
    else:
        yield passed("root_user", SECTION, "Runs as a non-root user.")
