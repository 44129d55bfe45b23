"""Instruction parser: raw Dockerfile lines to a BuildScript. Never fails on bad syntax."""

import logging
from typing import Iterable

from .models import BuildScript, Instruction, Keyword

logger = logging.getLogger(__name__)

BOM = "\ufeff"  # str.strip() keeps it

KEYWORDS = {
    "FROM": Keyword.BASE_IMAGE,
    "RUN": Keyword.RUN,
    "COPY": Keyword.COPY,
    "ADD": Keyword.ADD,
    "WORKDIR": Keyword.WORKDIR,
    "USER": Keyword.USER,
    "EXPOSE": Keyword.EXPOSE,
    "HEALTHCHECK": Keyword.HEALTHCHECK,
    "LABEL": Keyword.LABEL,
}

# Valid Dockerfile instructions that no rule keys on. Recorded as UNKNOWN, not malformed.
OTHER_INSTRUCTIONS = {
    "ENV", "ARG", "CMD", "ENTRYPOINT", "VOLUME", "STOPSIGNAL", "SHELL", "ONBUILD", "MAINTAINER",
}


def keyword_for(token: str) -> Keyword:
    """Map a leading token to a Keyword, case-insensitively."""
    return KEYWORDS.get(token.upper(), Keyword.UNKNOWN)


def parse_build_script(lines: Iterable[str], path: str = "") -> BuildScript:
    """Parse raw lines into instructions.

    Blank and comment lines are skipped. A line ending in a backslash continues
    onto the next non-comment line; continuation lines are kept as UNKNOWN
    instructions pointing back at the directive that owns them.
    """
    instructions: list[Instruction] = []
    owner: int | None = None  # line number of the directive being continued

    for number, raw_line in enumerate(lines, start=1):
        if number == 1:
            raw_line = raw_line.lstrip(BOM)
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if owner is not None:
            instructions.append(Instruction(
                keyword=Keyword.UNKNOWN,
                argument_text=line,
                line_number=number,
                raw=line,
                continuation_of=owner,
            ))
        else:
            instructions.append(_parse_directive(line, number))

        if line.endswith("\\"):
            if owner is None:
                owner = number
        else:
            owner = None

    script = BuildScript(instructions=tuple(instructions), path=path)
    logger.debug(
        "Parsed %d instructions (%d unknown) from %s",
        len(script), len(script.of(Keyword.UNKNOWN)), path or "<lines>",
    )
    return script


def _parse_directive(line: str, number: int) -> Instruction:
    parts = line.split(None, 1)
    token = parts[0]
    argument = parts[1].strip() if len(parts) > 1 else ""
    keyword = keyword_for(token)

    malformed = False
    if keyword != Keyword.UNKNOWN and not argument:
        # keyword with nothing after it cannot be matched meaningfully
        malformed = True
        keyword = Keyword.UNKNOWN
        argument = line
    elif keyword == Keyword.UNKNOWN:
        malformed = token.upper() not in OTHER_INSTRUCTIONS
        if malformed:
            argument = line

    return Instruction(
        keyword=keyword,
        argument_text=argument,
        line_number=number,
        raw=line,
        malformed=malformed,
    )
