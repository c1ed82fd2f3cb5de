"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import click

from deluge_lint import __version__
from deluge_lint.rules.base import Diagnostic
from deluge_lint.runner import FileReport

SEVERITY_COLORS = {"error": "red", "warning": "yellow"}


def render_human(reports: list[FileReport]) -> str:
    """Render a colorized per-file listing with a summary line."""
    lines: list[str] = []
    for report in reports:
        if report.status == "excluded":
            lines.append(f"{report.path}: ignored by configuration")
            continue
        if report.status == "failed":
            lines.append(click.style(f"{report.path}: error: {report.error}", fg="red"))
            continue
        if not report.diagnostics:
            lines.append(click.style(f"{report.path}: clean", fg="green"))
            continue

        lines.append(click.style(report.path, bold=True))
        for diagnostic in report.diagnostics:
            lines.append(f"  {format_diagnostic(diagnostic)}")

    lines.append(_summary_line(reports))
    return "\n".join(lines)


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Format one diagnostic as ``[Line N] ERROR: message (rule-id)``."""
    rule_suffix = f" ({diagnostic.rule_id})" if diagnostic.rule_id else ""
    text = (
        f"[Line {diagnostic.line}] {diagnostic.severity.upper()}: "
        f"{diagnostic.message}{rule_suffix}"
    )
    return click.style(text, fg=SEVERITY_COLORS.get(diagnostic.severity))


def render_json(reports: list[FileReport], *, config_source: str | None) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(reports, config_source=config_source), sort_keys=True)


def build_json_payload(
    reports: list[FileReport], *, config_source: str | None
) -> dict[str, Any]:
    """Build stable JSON payload for CI and automation."""
    return {
        "files": [report.to_dict() for report in reports],
        "summary": {
            "files": len(reports),
            "errors": sum(report.error_count for report in reports),
            "warnings": sum(report.warning_count for report in reports),
            "failed": sum(1 for report in reports if report.status == "failed"),
            "excluded": sum(1 for report in reports if report.status == "excluded"),
        },
        "meta": {
            "generated_at": datetime.now(tz=UTC)
            .replace(microsecond=0)
            .isoformat()
            .replace("+00:00", "Z"),
            "config_source": config_source,
            "version": __version__,
        },
    }


def _summary_line(reports: list[FileReport]) -> str:
    errors = sum(report.error_count for report in reports)
    warnings = sum(report.warning_count for report in reports)
    total = errors + warnings
    text = (
        f"{total} {_plural(total, 'problem')} "
        f"({errors} {_plural(errors, 'error')}, {warnings} {_plural(warnings, 'warning')})"
    )
    if errors:
        return click.style(text, fg="red", bold=True)
    if warnings:
        return click.style(text, fg="yellow", bold=True)
    return click.style(text, bold=True)


def _plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"
