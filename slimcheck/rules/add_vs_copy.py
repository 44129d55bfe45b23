"""Rule: prefer COPY for local files and RUN curl/wget for remote ones."""

from typing import Iterator

from ..models import BuildScript, ExclusionClassification, Keyword, SharedFacts
from .base import Finding, Severity
from .copy_usage import sources

SECTION = 12

URL_PREFIXES = ("http://", "https://")


def _is_url(source: str) -> bool:
    return source.lower().startswith(URL_PREFIXES)


def check(script: BuildScript, exclusions: ExclusionClassification, facts: SharedFacts) -> Iterator[Finding]:
    adds = script.of(Keyword.ADD)
    local = [a.line_number for a in adds if not all(_is_url(s) for s in sources(a))]
    remote = [a.line_number for a in adds if any(_is_url(s) for s in sources(a))]
    if local:
        yield Finding(
            rule_id="add_instead_of_copy",
            severity=Severity.WARNING,
            message="ADD used for local files. Use COPY unless automatic archive extraction is needed.",
            line_refs=tuple(local),
            section=SECTION,
        )
    if remote:
        yield Finding(
            rule_id="add_instead_of_copy",
            severity=Severity.WARNING,
            message="ADD downloads a remote file. Use RUN curl/wget for explicit error handling and cleanup.",
            line_refs=tuple(remote),
            section=SECTION,
        )
