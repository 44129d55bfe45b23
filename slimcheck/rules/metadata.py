"""Informational rules: LABEL, EXPOSE, HEALTHCHECK. Never counted."""

from typing import Iterator

from ..models import BuildScript, ExclusionClassification, Keyword, SharedFacts
from .base import Finding, Severity


def check_label(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    if not script.has(Keyword.LABEL):
        yield Finding(
            rule_id="label_missing",
            severity=Severity.INFO,
            message="Add LABEL instructions to record image version, maintainer and source.",
            section=8,
        )


def check_expose(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    if not script.has(Keyword.EXPOSE):
        yield Finding(
            rule_id="expose_missing",
            severity=Severity.INFO,
            message="If the application listens on the network, declare its ports with EXPOSE.",
            section=9,
        )


def check_healthcheck(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    if not script.has(Keyword.HEALTHCHECK):
        yield Finding(
            rule_id="healthcheck_missing",
            severity=Severity.INFO,
            message="Add a HEALTHCHECK so orchestrators can monitor the container.",
            section=10,
        )
