"""Rules: base image weight and floating 'latest' tag. Only the first FROM counts."""

import re
from typing import Iterator, Optional

from ..models import BuildScript, ExclusionClassification, Instruction, SharedFacts
from .base import Finding, Severity, passed

SECTION = 1


def image_reference(instruction: Instruction) -> str:
    """Image name from a FROM line: first non-flag argument."""
    args = instruction.arguments()
    return args[0] if args else ""


def image_tag(reference: str) -> Optional[str]:
    """Tag of an image reference, or None if untagged. Digest-pinned refs count as tagged."""
    if "@" in reference:
        return reference.split("@", 1)[1]
    last = reference.rsplit("/", 1)[-1]
    if ":" in last:
        return last.split(":", 1)[1]
    return None


def is_lightweight(reference: str, markers) -> bool:
    ref = reference.lower()
    return any(m.lower() in ref for m in markers)


def heavy_family(reference: str, families: dict[str, str]) -> Optional[str]:
    for name, pattern in families.items():
        if re.search(pattern, reference, re.IGNORECASE):
            return name
    return None


def check_weight(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Warn on known heavy distributions, note anything else that is not a slim variant."""
    base = script.base_image
    if base is None:
        yield Finding(
            rule_id="base_image_weight",
            severity=Severity.INFO,
            message="No FROM instruction found; base image checks skipped.",
            section=SECTION,
        )
        return
    ref = image_reference(base)
    if is_lightweight(ref, facts.config.lightweight_markers):
        yield passed("base_image_weight", SECTION, f"Lightweight base image in use ({ref}).")
        return
    family = heavy_family(ref, facts.config.heavy_distributions)
    if family:
        yield Finding(
            rule_id="base_image_weight",
            severity=Severity.WARNING,
            message=f"Base image '{ref}' is a full {family} image. Consider an alpine or slim variant.",
            line_refs=(base.line_number,),
            section=SECTION,
            tip="For example node:18-alpine instead of node:18, python:3.11-slim instead of python:3.11",
        )
    else:
        yield Finding(
            rule_id="base_image_weight",
            severity=Severity.INFO,
            message=f"Base image '{ref}' is not a known lightweight variant; check whether a slim tag exists.",
            line_refs=(base.line_number,),
            section=SECTION,
        )


def check_tag(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    """Error when the base image floats on 'latest' and is not a lightweight variant."""
    base = script.base_image
    if base is None:
        return
    ref = image_reference(base)
    if is_lightweight(ref, facts.config.lightweight_markers):
        return
    tag = image_tag(ref)
    floating = tag is not None and tag.lower() == "latest"
    if tag is None and facts.config.treat_untagged_as_latest:
        floating = True
    if floating:
        yield Finding(
            rule_id="base_image_tag",
            severity=Severity.ERROR,
            message=(
                f"Base image '{ref}' uses the floating 'latest' tag and is not a lightweight variant. "
                "Pin an explicit version and prefer a slim or alpine variant."
            ),
            line_refs=(base.line_number,),
            section=SECTION,
        )
