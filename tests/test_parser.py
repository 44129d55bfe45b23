"""Tests for the instruction parser and line source."""

import tempfile
from pathlib import Path

import pytest

from slimcheck.errors import ExclusionFileError, ParseError
from slimcheck.models import Keyword
from slimcheck.parser import keyword_for, parse_build_script
from slimcheck.source import default_exclusion_path, read_lines, read_optional_text


def _parse(text: str):
    return parse_build_script(text.splitlines())


def test_keyword_is_case_insensitive():
    """Leading token maps to a keyword regardless of case."""
    assert keyword_for("from") == Keyword.BASE_IMAGE
    assert keyword_for("Run") == Keyword.RUN
    assert keyword_for("healthcheck") == Keyword.HEALTHCHECK
    assert keyword_for("ENV") == Keyword.UNKNOWN


def test_blank_and_comment_lines_skipped_line_numbers_kept():
    """Comments and blanks produce no instruction; numbering follows the source."""
    script = _parse("# syntax=docker/dockerfile:1\n\nFROM alpine:3.19\n  # comment\nWORKDIR /app\n")
    assert [(i.keyword, i.line_number) for i in script] == [
        (Keyword.BASE_IMAGE, 3),
        (Keyword.WORKDIR, 5),
    ]
    assert script.instructions[0].argument_text == "alpine:3.19"


def test_line_numbers_strictly_increase():
    """Instruction order follows source order."""
    script = _parse("FROM a\nRUN x \\\n  && y\n\nUSER app\nfoo bar\n")
    numbers = [i.line_number for i in script]
    assert numbers == sorted(set(numbers))


def test_continuation_lines_attached_as_unknown():
    """Continuation lines are UNKNOWN and fold into the owning RUN."""
    script = _parse(
        "RUN apt-get update \\\n"
        "    && apt-get install -y curl \\\n"
        "    && rm -rf /var/lib/apt/lists/*\n"
        "USER app\n"
    )
    run, cont1, cont2, user = script.instructions
    assert run.keyword == Keyword.RUN
    assert cont1.keyword == Keyword.UNKNOWN and cont1.continuation_of == 1
    assert cont2.keyword == Keyword.UNKNOWN and cont2.continuation_of == 1
    assert user.keyword == Keyword.USER and user.continuation_of is None
    assert script.command_text(run) == (
        "apt-get update && apt-get install -y curl && rm -rf /var/lib/apt/lists/*"
    )
    assert [c.line_number for c in script.commands()] == [1, 4]


def test_comment_inside_continuation_does_not_end_it():
    """A comment line between continued lines is skipped."""
    script = _parse("RUN a \\\n# note\n  && b\nUSER app\n")
    assert script.command_text(script.instructions[0]) == "a && b"
    assert script.instructions[-1].keyword == Keyword.USER


def test_malformed_lines_degrade_to_unknown():
    """Bad syntax never raises; it becomes a malformed UNKNOWN instruction."""
    script = _parse("FROM\napt-get install foo\nENV A=1\n")
    kinds = [(i.keyword, i.malformed) for i in script]
    assert kinds == [
        (Keyword.UNKNOWN, True),
        (Keyword.UNKNOWN, True),
        (Keyword.UNKNOWN, False),
    ]
    assert script.base_image is None


def test_first_from_is_base_image_all_stages_recorded():
    """Only the first FROM is 'the' base image."""
    script = _parse("FROM golang:1.22 AS build\nFROM gcr.io/distroless/static\n")
    assert script.base_image.argument_text == "golang:1.22 AS build"
    assert len(script.stages) == 2


def test_arguments_drop_flags_and_read_json_form():
    """Flags are dropped; exec-form JSON arrays are decoded."""
    script = _parse('COPY --chown=app:app . /app\nCOPY ["src", "/app/src"]\n')
    assert script.instructions[0].arguments() == [".", "/app"]
    assert script.instructions[1].arguments() == ["src", "/app/src"]


def test_read_lines_missing_file_raises():
    """Missing build script is the only parse failure."""
    with tempfile.TemporaryDirectory() as d:
        with pytest.raises(ParseError) as exc:
            read_lines(Path(d) / "Dockerfile")
        assert "not found" in str(exc.value)


def test_read_optional_text_absent_vs_empty():
    """Absent file is None; empty file is an empty string."""
    with tempfile.TemporaryDirectory() as d:
        path = Path(d) / ".dockerignore"
        assert read_optional_text(path) is None
        path.write_text("")
        assert read_optional_text(path) == ""


def test_default_exclusion_path_is_context_root():
    """.dockerignore sits at the build-context root, the working directory unless given."""
    assert default_exclusion_path(Path("ctx")) == Path("ctx/.dockerignore")
    assert default_exclusion_path() == Path.cwd() / ".dockerignore"


def test_byte_order_mark_is_dropped():
    """A UTF-8 BOM does not hide the first keyword or comment."""
    with tempfile.TemporaryDirectory() as d:
        dockerfile = Path(d) / "Dockerfile"
        dockerfile.write_bytes("FROM ubuntu:latest\nUSER app\n".encode("utf-8-sig"))
        ignore = Path(d) / ".dockerignore"
        ignore.write_bytes("# nothing\n".encode("utf-8-sig"))
        lines = read_lines(dockerfile)
        assert lines[0] == "FROM ubuntu:latest"
        assert read_optional_text(ignore) == "# nothing\n"


def test_bom_in_lines_still_parses():
    """Lines handed over directly may still carry the mark."""
    script = parse_build_script(["\ufeffFROM ubuntu:latest", "USER app"])
    first = script.instructions[0]
    assert first.keyword == Keyword.BASE_IMAGE
    assert not first.malformed


def test_unreadable_exclusion_file_raises(monkeypatch):
    """Present but unreadable is an error, not ABSENT."""
    with tempfile.TemporaryDirectory() as d:
        path = Path(d) / ".dockerignore"
        path.write_text(".git\n")

        def denied(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "open", denied)
        with pytest.raises(ExclusionFileError) as exc:
            read_optional_text(path)
        assert "could not be read" in str(exc.value)
