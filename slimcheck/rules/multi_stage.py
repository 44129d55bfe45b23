"""Rule: compile steps belong in a separate build stage."""

import re
from typing import Iterator

from ..models import BuildScript, ExclusionClassification, Instruction, SharedFacts
from .base import Finding, Severity, passed

SECTION = 6


def stage_name(instruction: Instruction) -> str | None:
    """Name from 'FROM image AS name', if any."""
    args = instruction.arguments()
    if len(args) >= 3 and args[-2].lower() == "as":
        return args[-1]
    return None


def check(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    if facts.stage_count >= 2:
        yield passed("multi_stage", SECTION, f"Multi-stage build in use ({facts.stage_count} stages).")
        named = [n for n in (stage_name(s) for s in script.stages) if n]
        if named:
            yield passed("multi_stage", SECTION, f"Named build stage(s) detected: {', '.join(named)}.")
        return

    builds = [
        c.line_number for c in facts.commands
        if any(re.search(p, c.text) for p in facts.config.build_tool_patterns)
    ]
    if builds:
        yield Finding(
            rule_id="multi_stage",
            severity=Severity.WARNING,
            message="Compile/build steps found in a single-stage build. Use a multi-stage build to keep toolchains out of the final image.",
            line_refs=tuple(builds),
            section=SECTION,
            tip="Build in one stage, then COPY --from=<stage> only the runtime artifacts.",
        )
    else:
        yield Finding(
            rule_id="multi_stage",
            severity=Severity.INFO,
            message="No compile step detected; a single-stage build is probably fine.",
            section=SECTION,
        )
