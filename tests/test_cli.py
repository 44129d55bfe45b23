"""Tests for the CLI: exit codes, JSON output, --explain, config discovery."""

import json
import tempfile
from pathlib import Path

from typer.testing import CliRunner

from slimcheck.cli import app

runner = CliRunner()

GOOD_IGNORE = ".git\nnode_modules\n__pycache__/\n*.log\n.env\n"
CLEAN = "FROM python:3.11-slim\nWORKDIR /app\nCOPY app/ ./app/\nUSER app\n"


def _write(d: str, dockerfile: str, ignore: str | None = GOOD_IGNORE) -> Path:
    path = Path(d) / "Dockerfile"
    path.write_text(dockerfile)
    if ignore is not None:
        (Path(d) / ".dockerignore").write_text(ignore)
    return path


def _invoke(d: str, *args: str):
    """Run with the temp dir as build context."""
    return runner.invoke(app, [*args, "--context", d])


def test_missing_dockerfile_exits_1():
    """Missing build script is fatal before any rule runs."""
    with tempfile.TemporaryDirectory() as d:
        result = runner.invoke(app, [str(Path(d) / "Dockerfile")])
    assert result.exit_code == 1
    assert "not found" in result.output
    assert "[Check" not in result.output


def test_clean_exits_0():
    with tempfile.TemporaryDirectory() as d:
        result = _invoke(d, str(_write(d, CLEAN)))
    assert result.exit_code == 0, result.output
    assert "0 error(s), 0 warning(s)" in result.output
    assert "[Check 11] User privileges" in result.output


def test_errors_exit_1():
    with tempfile.TemporaryDirectory() as d:
        result = _invoke(d, str(_write(d, "FROM ubuntu:latest\nWORKDIR /app\nUSER app\n")))
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_warnings_only_exit_2():
    """No .dockerignore is a warning, not an error."""
    with tempfile.TemporaryDirectory() as d:
        result = _invoke(d, str(_write(d, CLEAN, ignore=None)))
    assert result.exit_code == 2
    assert "No .dockerignore file found" in result.output


def test_disable_rule_flag():
    with tempfile.TemporaryDirectory() as d:
        result = _invoke(d, str(_write(d, CLEAN, ignore=None)), "--disable", "exclusion_file")
    assert result.exit_code == 0


def test_empty_ignore_file_exit_1():
    with tempfile.TemporaryDirectory() as d:
        result = _invoke(d, str(_write(d, CLEAN, ignore="")))
    assert result.exit_code == 1
    assert "bypass" in result.output


def test_explicit_ignore_file_option():
    with tempfile.TemporaryDirectory() as d:
        dockerfile = _write(d, CLEAN, ignore=None)
        other = Path(d) / "custom.ignore"
        other.write_text(GOOD_IGNORE)
        result = _invoke(d, str(dockerfile), "-i", str(other))
    assert result.exit_code == 0


def test_json_output():
    with tempfile.TemporaryDirectory() as d:
        result = _invoke(d, str(_write(d, "FROM alpine:3.19\nCOPY . .\n")), "--json")
    data = json.loads(result.output)
    assert data["exclusions"]["state"] == "SUFFICIENT"
    assert data["summary"]["exit_status"] == result.exit_code == 2
    copy = [f for f in data["findings"] if f["rule_id"] == "copy_whole_context"]
    assert copy[0]["line_refs"] == [2]


def test_config_file_in_context_is_used():
    """.slimcheck.yaml in the build context adjusts thresholds."""
    dockerfile = CLEAN + "RUN echo 1\nRUN echo 2\nRUN echo 3\n"
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, dockerfile)
        assert _invoke(d, str(path)).exit_code == 0
        (Path(d) / ".slimcheck.yaml").write_text("run_threshold: 2\n")
        assert _invoke(d, str(path)).exit_code == 2
        assert _invoke(d, str(path), "--run-threshold", "3").exit_code == 0


def test_bad_config_exits_1():
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, CLEAN)
        (Path(d) / ".slimcheck.yaml").write_text("- just\n- a list\n")
        result = _invoke(d, str(path))
    assert result.exit_code == 1
    assert "mapping" in result.output


def test_explain():
    result = runner.invoke(app, ["--explain", "root_user"])
    assert result.exit_code == 0
    assert "Rule: root_user" in result.output
    listing = runner.invoke(app, ["--explain", "list"])
    assert "base_image_tag" in listing.output
    unknown = runner.invoke(app, ["--explain", "nope"])
    assert unknown.exit_code == 1


def test_ignore_file_found_at_working_directory(monkeypatch):
    """Dockerfile in a subdirectory; .dockerignore at the context root is still checked."""
    with tempfile.TemporaryDirectory() as d:
        (Path(d) / "docker").mkdir()
        (Path(d) / "docker" / "Dockerfile").write_text(CLEAN)
        (Path(d) / ".dockerignore").write_text("")
        monkeypatch.chdir(d)
        result = runner.invoke(app, ["docker/Dockerfile"])
    assert result.exit_code == 1
    assert "bypass" in result.output
    assert "No .dockerignore file found" not in result.output


def test_config_found_at_working_directory(monkeypatch):
    """.slimcheck.yaml is looked up in the build context, not beside the Dockerfile."""
    with tempfile.TemporaryDirectory() as d:
        (Path(d) / "docker").mkdir()
        (Path(d) / "docker" / "Dockerfile").write_text(CLEAN + "RUN echo 1\nRUN echo 2\nRUN echo 3\n")
        (Path(d) / ".dockerignore").write_text(GOOD_IGNORE)
        (Path(d) / ".slimcheck.yaml").write_text("run_threshold: 2\n")
        monkeypatch.chdir(d)
        result = runner.invoke(app, ["docker/Dockerfile"])
    assert result.exit_code == 2
    assert "RUN" in result.output


def test_unreadable_ignore_file_exits_1(monkeypatch):
    """An exclusion file that cannot be read is a single error line, not a traceback."""
    real_open = Path.open

    def guarded(self, *args, **kwargs):
        if self.name == ".dockerignore":
            raise PermissionError(13, "Permission denied")
        return real_open(self, *args, **kwargs)

    with tempfile.TemporaryDirectory() as d:
        path = _write(d, CLEAN)
        monkeypatch.setattr(Path, "open", guarded)
        result = _invoke(d, str(path))
    assert result.exit_code == 1
    assert "could not be read" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "[Check" not in result.output
