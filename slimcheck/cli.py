"""CLI entry point — read files, run rules, print the report, exit 0/1/2."""

from pathlib import Path
from typing import List, Optional

import click
import typer

from .config import find_config, load_config
from .engine import analyze
from .errors import ConfigError, ExclusionFileError, ParseError
from .format import format_human, format_json
from .logger import setup_logging
from .rules.registry import RULE_INFO
from .source import DEFAULT_BUILD_SCRIPT, default_exclusion_path, read_lines, read_optional_text

app = typer.Typer(help="Check a Dockerfile and .dockerignore for image size and security problems.")


def _err(msg: str) -> None:
    """Print a fatal error and exit 1. Exit 2 is reserved for 'warnings only'."""
    typer.echo(click.style(f"✖ ERROR: {msg}", fg="red"), err=True)
    raise typer.Exit(1)


@app.command()
def main(
    build_script: Path = typer.Argument(Path(DEFAULT_BUILD_SCRIPT), help="Dockerfile path (default: ./Dockerfile)"),
    context: Path = typer.Option(Path("."), "--context", "-C", help="Build context root (default: current directory)"),
    ignore_file: Optional[Path] = typer.Option(None, "--ignore-file", "-i", help="Exclusion file (default: .dockerignore in the build context)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config (default: .slimcheck.yaml in the build context)"),
    disable: Optional[List[str]] = typer.Option(None, "--disable", "-d", help="Disable a rule by ID (repeatable)"),
    run_threshold: Optional[int] = typer.Option(None, "--run-threshold", min=0, help="Max RUN instructions before warning"),
    min_exclusion_rules: Optional[int] = typer.Option(None, "--min-exclusion-rules", min=1, help="Min effective .dockerignore rules"),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and rule IDs in the report"),
    explain: Optional[str] = typer.Option(None, "--explain", "-e", help="Explain a rule by ID ('list' for all) and exit"),
) -> None:
    """Lint a Dockerfile. Exit 0 = clean, 1 = errors, 2 = warnings only."""
    setup_logging("DEBUG" if verbose else "WARNING")
    if explain:
        _print_explain(explain)
        return

    try:
        config = load_config(config_path or find_config(context))
    except ConfigError as e:
        _err(str(e))
    config = config.with_overrides(
        run_threshold=run_threshold,
        min_exclusion_rules=min_exclusion_rules,
        disabled_rules=config.disabled_rules | frozenset(disable or ()),
    )

    exclusion_path = ignore_file or default_exclusion_path(context)
    try:
        lines = read_lines(build_script)
        exclusion_content = read_optional_text(exclusion_path)
    except (ParseError, ExclusionFileError) as e:
        _err(str(e))

    _, exclusions, verdict = analyze(
        lines, exclusion_content, config,
        path=str(build_script), exclusion_path=str(exclusion_path),
    )

    if json_out:
        typer.echo(format_json(str(build_script), str(exclusion_path), exclusions, verdict))
    else:
        typer.echo(format_human(str(build_script), str(exclusion_path), verdict, verbose=verbose))

    raise typer.Exit(verdict.exit_status)


def _print_explain(rule_id: str) -> None:
    """Print rule description."""
    if rule_id in ("list", "rules"):
        typer.echo("Available rules:")
        for rid in RULE_INFO:
            typer.echo(f"  {rid}")
        typer.echo("\nUse: slimcheck --explain <rule_id>")
        return
    info = RULE_INFO.get(rule_id)
    if not info:
        _err(f"Unknown rule: {rule_id}\nAvailable: {', '.join(RULE_INFO.keys())}")
    typer.echo(f"Rule: {rule_id}")
    typer.echo(f"Severity: {info['severity']}")
    typer.echo(f"Description: {info['description']}")
    typer.echo(f"When: {info['when']}")
    typer.echo(f"Fix: {info['fix']}")


def _main() -> None:
    app()


if __name__ == "__main__":
    _main()
