"""Rule: .dockerignore presence, anti-bypass validation, and pattern coverage."""

from typing import Iterator

from ..models import BuildScript, ExclusionClassification, ExclusionState, SharedFacts
from .base import Finding, Severity, passed

SECTION = 0

EXAMPLE_CONTENT = "\n".join([
    "Example .dockerignore:",
    "  .git",
    "  .gitignore",
    "  README.md",
    "  Dockerfile*",
    "  .dockerignore",
    "  node_modules",
    "  npm-debug.log*",
    "  target/",
    "  dist/",
    "  *.log",
    "  .env*",
    "  coverage/",
    "  .pytest_cache/",
    "  __pycache__/",
])


def check_state(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Absent is a warning. Empty or comment-only is an error: it looks like a bypass."""
    state = exclusions.state
    if state == ExclusionState.ABSENT:
        yield Finding(
            rule_id="exclusion_file",
            severity=Severity.WARNING,
            message=(
                "No .dockerignore file found. Add one to keep unneeded files out of the build "
                "context; it shrinks the context, speeds up builds and avoids leaking secrets."
            ),
            section=SECTION,
            tip=EXAMPLE_CONTENT,
        )
    elif state == ExclusionState.EMPTY:
        yield Finding(
            rule_id="exclusion_file",
            severity=Severity.ERROR,
            message=(
                ".dockerignore is empty. An empty file excludes nothing and is "
                "indistinguishable from an attempt to bypass this check."
            ),
            section=SECTION,
        )
    elif state == ExclusionState.COMMENT_ONLY:
        yield Finding(
            rule_id="exclusion_file",
            severity=Severity.ERROR,
            message=(
                ".dockerignore contains only comments and blank lines, so it excludes nothing. "
                "This is indistinguishable from an attempt to bypass this check."
            ),
            section=SECTION,
        )
    elif state == ExclusionState.INSUFFICIENT:
        yield Finding(
            rule_id="exclusion_file",
            severity=Severity.WARNING,
            message=(
                f".dockerignore has only {exclusions.effective_rule_count} effective rule(s); "
                "that is unlikely to shrink the build context much."
            ),
            section=SECTION,
            tip="Include at least the common entries, e.g. .git, node_modules, *.log",
        )
    else:
        yield passed(
            "exclusion_file", SECTION,
            f".dockerignore contains {exclusions.effective_rule_count} effective rules.",
        )


def check_coverage(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Exactly one outcome: critical missing, advisory missing, or all covered."""
    if exclusions.state != ExclusionState.SUFFICIENT:
        return
    config = facts.config
    if exclusions.missing_critical:
        patterns = ", ".join(config.critical_exclusions.get(n, n) for n in exclusions.missing_critical)
        yield Finding(
            rule_id="exclusion_coverage",
            severity=Severity.WARNING,
            message=f".dockerignore is missing critical entries ({patterns}); the image may grow significantly.",
            section=SECTION,
        )
    elif exclusions.missing_advisory:
        patterns = ", ".join(config.advisory_exclusions.get(n, n) for n in exclusions.missing_advisory)
        yield Finding(
            rule_id="exclusion_coverage",
            severity=Severity.INFO,
            message=f".dockerignore could also exclude: {patterns}.",
            section=SECTION,
        )
    else:
        yield passed("exclusion_coverage", SECTION, ".dockerignore covers the important exclusion patterns.")
