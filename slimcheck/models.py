"""Structured model of a parsed build script and its exclusion file."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional


class Keyword(str, Enum):
    BASE_IMAGE = "BASE_IMAGE"
    RUN = "RUN"
    COPY = "COPY"
    ADD = "ADD"
    WORKDIR = "WORKDIR"
    USER = "USER"
    EXPOSE = "EXPOSE"
    HEALTHCHECK = "HEALTHCHECK"
    LABEL = "LABEL"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Instruction:
    """One build-script line."""

    keyword: Keyword
    argument_text: str
    line_number: int  # 1-based
    raw: str = ""
    continuation_of: Optional[int] = None  # owning directive line for continuation lines
    malformed: bool = False  # leading token is not a build instruction, or has no argument

    def arguments(self) -> list[str]:
        """Positional arguments, flags (``--chown=...``) dropped. Handles the JSON array form."""
        text = self.argument_text.strip()
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
            if isinstance(parsed, list) and all(isinstance(p, str) for p in parsed):
                return list(parsed)
        return [t for t in text.split() if not t.startswith("--")]


@dataclass(frozen=True)
class BuildScript:
    """Ordered, immutable sequence of instructions."""

    instructions: tuple[Instruction, ...] = ()
    path: str = ""

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def of(self, keyword: Keyword) -> list[Instruction]:
        return [i for i in self.instructions if i.keyword == keyword]

    def has(self, keyword: Keyword) -> bool:
        return any(i.keyword == keyword for i in self.instructions)

    @property
    def stages(self) -> list[Instruction]:
        return self.of(Keyword.BASE_IMAGE)

    @property
    def base_image(self) -> Optional[Instruction]:
        """First BASE_IMAGE directive. Later stages are recorded but not 'the' base image."""
        stages = self.stages
        return stages[0] if stages else None

    def command_text(self, instruction: Instruction) -> str:
        """Logical command: the directive's argument plus its continuation lines."""
        parts = [_strip_backslash(instruction.argument_text)]
        for other in self.instructions:
            if other.continuation_of == instruction.line_number:
                parts.append(_strip_backslash(other.argument_text))
        return " ".join(p for p in parts if p)

    def commands(self) -> list["Command"]:
        """One entry per directive (continuation lines folded into their owner)."""
        return [
            Command(i.line_number, i.keyword, self.command_text(i), i.malformed)
            for i in self.instructions
            if i.continuation_of is None
        ]


def _strip_backslash(text: str) -> str:
    text = text.strip()
    if text.endswith("\\"):
        text = text[:-1].rstrip()
    return text


@dataclass(frozen=True)
class Command:
    """A logical directive: keyword, first line, folded text."""

    line_number: int
    keyword: Keyword
    text: str
    malformed: bool = False

    @property
    def runs_at_build(self) -> bool:
        """RUN, or a stray shell line. CMD, ENTRYPOINT and HEALTHCHECK run in the container."""
        return self.keyword == Keyword.RUN or (self.keyword == Keyword.UNKNOWN and self.malformed)


class ExclusionState(str, Enum):
    ABSENT = "ABSENT"
    EMPTY = "EMPTY"
    COMMENT_ONLY = "COMMENT_ONLY"
    INSUFFICIENT = "INSUFFICIENT"
    SUFFICIENT = "SUFFICIENT"


@dataclass(frozen=True)
class ExclusionClassification:
    """Result of validating the exclusion (.dockerignore) file."""

    state: ExclusionState
    effective_rule_count: int = 0
    missing_critical: tuple[str, ...] = ()
    missing_advisory: tuple[str, ...] = ()
    rules: tuple[str, ...] = ()  # effective (non-blank, non-comment) lines
    path: str = ""

    @property
    def present(self) -> bool:
        return self.state != ExclusionState.ABSENT


@dataclass(frozen=True)
class SharedFacts:
    """Facts derived once per run and handed to every rule by value."""

    config: Any  # slimcheck.config.Config
    commands: tuple[Command, ...] = ()
    run_count: int = 0
    stage_count: int = 0
    # package-manager family -> line numbers of commands invoking it
    families: dict[str, tuple[int, ...]] = field(default_factory=dict)
