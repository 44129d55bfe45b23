"""Terminal and JSON output: sectioned findings, summary, verdict, tips."""

import json
import shutil
from typing import List

import click

from .models import ExclusionClassification
from .rules.base import SECTIONS, Finding, Severity
from .verdict import EXIT_ERRORS, EXIT_WARNINGS, Verdict

EXTRA_SECTIONS = {13: "Unrecognized lines", 14: "Custom rules"}

MARKERS = {
    Severity.ERROR: ("✖ ERROR", "red"),
    Severity.WARNING: ("⚠ WARNING", "yellow"),
    Severity.INFO: ("ℹ INFO", "blue"),
}
PASS_MARKER = ("✔ PASS", "green")
TIP_MARKER = ("→ TIP", "cyan")

TIPS = [
    "Use lightweight base images (alpine, slim)",
    "Chain RUN commands to reduce the number of layers",
    "Use multi-stage builds to separate build and runtime environments",
    "Clean package manager caches and temporary files in the same RUN",
    "Keep a thorough .dockerignore file",
    "Use --no-install-recommends to skip recommended packages",
]


def _get_width() -> int:
    try:
        return min(72, shutil.get_terminal_size((72, 24)).columns)
    except OSError:
        return 72


def _line_suffix(f: Finding) -> str:
    if not f.line_refs:
        return ""
    label = "line" if len(f.line_refs) == 1 else "lines"
    return f" ({label}: {', '.join(str(n) for n in f.line_refs)})"


def _finding_lines(f: Finding, verbose: bool) -> List[str]:
    marker, color = PASS_MARKER if f.passed else MARKERS[f.severity]
    text = f"{marker}: {f.message}{_line_suffix(f)}"
    if verbose:
        text = f"{text} [{f.rule_id}]"
    lines = [click.style(f"  {text}", fg=color)]
    if f.tip:
        tip_marker, tip_color = TIP_MARKER
        first, *rest = f.tip.splitlines()
        lines.append(click.style(f"  {tip_marker}: {first}", fg=tip_color))
        for extra in rest:
            lines.append(click.style(f"      {extra}", fg=tip_color))
    return lines


def _section_title(section: int) -> str:
    if section == 0:
        return f"--- {SECTIONS[0]} ---"
    title = SECTIONS.get(section) or EXTRA_SECTIONS.get(section, "Other")
    return f"[Check {section}] {title}"


def format_human(build_script: str, ignore_file: str, verdict: Verdict, verbose: bool = False) -> str:
    """Build the human report as a single string."""
    width = _get_width()
    lines = ["=" * width]
    lines.append(" slimcheck · Dockerfile image size check")
    lines.append(f" Dockerfile:    {build_script}")
    lines.append(f" .dockerignore: {ignore_file}")
    lines.append("=" * width)

    by_section: dict[int, List[Finding]] = {}
    for f in verdict.findings:
        by_section.setdefault(f.section, []).append(f)
    sections = sorted(set(SECTIONS) | set(by_section))

    for section in sections:
        lines.append("")
        lines.append(click.style(_section_title(section), bold=True))
        found = by_section.get(section, [])
        if not found:
            lines.append(click.style("  no findings", dim=True))
        for f in found:
            lines.extend(_finding_lines(f, verbose))

    lines.append("")
    lines.append("=" * width)
    lines.append(f" {verdict.error_count} error(s), {verdict.warning_count} warning(s)")
    lines.append(_verdict_line(verdict))
    lines.append("")
    lines.append(" Image size tips:")
    for tip in TIPS:
        lines.append(f"  • {tip}")
    lines.append("=" * width)
    return "\n".join(lines)


def _verdict_line(verdict: Verdict) -> str:
    status = verdict.exit_status
    if status == EXIT_ERRORS:
        return click.style(" ✖ FAILED: serious problems must be fixed", fg="red", bold=True)
    if status == EXIT_WARNINGS:
        return click.style(" ⚠ PASSED WITH WARNINGS: optimizations recommended", fg="yellow", bold=True)
    return click.style(" ✔ PASSED: Dockerfile follows image size best practices", fg="green", bold=True)


def format_json(
    build_script: str,
    ignore_file: str,
    exclusions: ExclusionClassification,
    verdict: Verdict,
) -> str:
    """JSON output for piping/CI."""
    output = {
        "build_script": build_script,
        "ignore_file": ignore_file,
        "exclusions": {
            "state": exclusions.state.value,
            "effective_rule_count": exclusions.effective_rule_count,
            "missing_critical": list(exclusions.missing_critical),
            "missing_advisory": list(exclusions.missing_advisory),
        },
        "findings": [
            {
                "rule_id": f.rule_id,
                "severity": f.severity.value,
                "message": f.message,
                "line_refs": list(f.line_refs),
                "section": f.section,
                "passed": f.passed,
                **({"tip": f.tip} if f.tip else {}),
            }
            for f in verdict.findings
        ],
        "summary": {
            "errors": verdict.error_count,
            "warnings": verdict.warning_count,
            "exit_status": verdict.exit_status,
        },
    }
    return json.dumps(output, indent=2)
