"""Rules: COPY/ADD of the whole context, and of files a runtime image does not need."""

from typing import Iterator

from ..models import BuildScript, ExclusionClassification, Instruction, Keyword, SharedFacts
from .base import Finding, Severity, passed

SECTION = 7

CONTEXT_ROOT = {".", "./"}


def _from_context(instruction: Instruction) -> bool:
    """COPY --from=<stage> reads another stage, not the build context."""
    return "--from=" not in instruction.argument_text.lower()


def _copies(script: BuildScript) -> list[Instruction]:
    return [
        i for i in script
        if i.keyword in (Keyword.COPY, Keyword.ADD) and _from_context(i)
    ]


def sources(instruction: Instruction) -> list[str]:
    """All arguments but the destination."""
    args = instruction.arguments()
    return args[:-1] if len(args) > 1 else args


def check_whole_context(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    offending = [
        i.line_number for i in _copies(script)
        if len(i.arguments()) > 1 and set(sources(i)) <= CONTEXT_ROOT
    ]
    if offending:
        yield Finding(
            rule_id="copy_whole_context",
            severity=Severity.WARNING,
            message="'COPY .' or 'ADD .' copies the entire build context.",
            line_refs=tuple(offending),
            section=SECTION,
            tip="Copy specific paths, or make sure .dockerignore is thorough.",
        )
        return
    yield passed("copy_whole_context", SECTION, "COPY/ADD use specific paths.")


def check_unnecessary_files(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Reports the first match only."""
    for instruction in _copies(script):
        for pattern in facts.config.unnecessary_copy_patterns:
            if pattern in instruction.argument_text:
                yield Finding(
                    rule_id="copy_unnecessary_files",
                    severity=Severity.WARNING,
                    message=f"COPY/ADD of files usually not needed at runtime: {pattern}",
                    line_refs=(instruction.line_number,),
                    section=SECTION,
                )
                return
