"""Formatters for ReportView output.

This module provides functions to format a ReportView into the
CLI output formats (text, markdown, JSON, compact grid).
"""

from __future__ import annotations

import json
import math
from typing import TYPE_CHECKING

from testlens.core.view import NO_MATCHES_MESSAGE

if TYPE_CHECKING:
    from testlens.core.view import ReportView, TestEntry

OUTPUT_FORMATS = ("text", "markdown", "json")

PASS_MARK = "✓"
FAIL_MARK = "✗"


def format_duration(duration_ms: float | None) -> str:
    """Format a duration, or a placeholder when unknown."""
    if duration_ms is None or not math.isfinite(duration_ms):
        return "?ms"
    if duration_ms == int(duration_ms):
        return f"{int(duration_ms)}ms"
    return f"{duration_ms:.1f}ms"


def _status_mark(entry: TestEntry) -> str:
    return PASS_MARK if entry.record.passed else FAIL_MARK


def format_grid(view: ReportView, width: int = 60) -> str:
    """Format the status overview as rows of pass/fail marks."""
    marks = "".join(PASS_MARK if cell.passed else FAIL_MARK for cell in view.grid)
    rows = [marks[i : i + width] for i in range(0, len(marks), width)]
    lines = rows or ["(no tests)"]
    lines.append("")
    lines.append(view.summary)

    failing = [cell for cell in view.grid if not cell.passed]
    if failing:
        lines.append("")
        for cell in failing:
            lines.append(f"{FAIL_MARK} {cell.tooltip}  #{cell.anchor}")

    return "\n".join(lines)


def format_text(view: ReportView) -> str:
    """Format the grouped listing as plain text.

    Failure messages are printed normalized but without link markup.
    """
    if view.no_matches:
        return NO_MATCHES_MESSAGE

    lines = []
    for group in view.groups:
        lines.append(group.key or "(root)")
        for entry in group.entries:
            lines.append(
                f"  {_status_mark(entry)} {entry.title} ({format_duration(entry.duration_ms)})"
                f"  #{entry.anchor}"
            )
            for message in entry.plain_messages:
                for message_line in message.splitlines():
                    lines.append(f"      {message_line}")
        lines.append("")

    lines.append(view.summary)
    return "\n".join(lines)


def format_markdown(view: ReportView) -> str:
    """Format the grouped listing as markdown.

    Failure messages are emitted inside HTML ``<pre>`` blocks so the
    source links survive rendering.
    """
    lines = ["# Test Results", "", f"**Summary:** {view.summary}", ""]

    if view.no_matches:
        lines.append(f"*{NO_MATCHES_MESSAGE}*")
        return "\n".join(lines)

    for group in view.groups:
        lines.append(f"## {group.key or '(root)'}")
        lines.append("")
        for entry in group.entries:
            lines.append(
                f'- <a id="{entry.anchor}"></a>{_status_mark(entry)} **{entry.title}** '
                f"({format_duration(entry.duration_ms)})"
            )
            for message in entry.failure_messages:
                lines.append("")
                lines.append(f"  <pre>{message}</pre>")
        lines.append("")

    return "\n".join(lines)


def format_json(view: ReportView) -> str:
    """Format the view as JSON."""
    return json.dumps(view.to_dict(), indent=2, ensure_ascii=False)


def format_output(view: ReportView, output_format: str = "text") -> str:
    """Format output based on requested format."""
    if output_format == "json":
        return format_json(view)
    elif output_format == "markdown":
        return format_markdown(view)
    return format_text(view)
