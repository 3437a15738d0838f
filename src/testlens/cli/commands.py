"""Command handlers for the testlens CLI."""

from __future__ import annotations

import sys
from pathlib import Path

from testlens import formatters
from testlens.config import get_settings
from testlens.core.identifiers import copy_to_clipboard
from testlens.core.linkify import StackTraceLinkifier
from testlens.core.view import build_view, find_entry
from testlens.exceptions import MalformedReportError
from testlens.logging import get_logger
from testlens.models import Query, TestRunReport
from testlens.parsers.jest import JestReportParser

logger = get_logger(__name__)


def load_report(report_path: Path) -> TestRunReport | None:
    """Load a report, printing the error and returning None on failure."""
    try:
        return JestReportParser.parse_file(report_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
    except MalformedReportError as e:
        print(f"Error: Malformed report: {e}", file=sys.stderr)
    return None


def _linkifier(escape_html: bool | None = None) -> StackTraceLinkifier:
    linkifier = StackTraceLinkifier.from_settings(get_settings())
    if escape_html is not None:
        linkifier.escape_html = escape_html
    return linkifier


def run_show(
    report_path: Path,
    search: str = "",
    hide_passing: bool = False,
    output_format: str = "text",
) -> int:
    """Print the grouped listing of a report."""
    report = load_report(report_path)
    if report is None:
        return 1

    query = Query(show_passing=not hide_passing, search_text=search)
    view = build_view(report, query, _linkifier())
    logger.info(
        "view built",
        groups=len(view.groups),
        tests=len(view.entries),
        no_matches=view.no_matches,
    )
    print(formatters.format_output(view, output_format))
    return 0


def run_grid(report_path: Path, width: int = 60) -> int:
    """Print the compact status overview of a report."""
    report = load_report(report_path)
    if report is None:
        return 1

    view = build_view(report, Query(), _linkifier())
    print(formatters.format_grid(view, width=width))
    return 0


def run_copy(report_path: Path, anchor: str, use_clipboard: bool = True) -> int:
    """Print the clipboard payload of the test with the given anchor."""
    report = load_report(report_path)
    if report is None:
        return 1

    entry = find_entry(build_view(report, Query(), _linkifier()), anchor)
    if entry is None:
        print(f"Error: No test with anchor '{anchor}'", file=sys.stderr)
        return 1

    if use_clipboard:
        payload = copy_to_clipboard(entry.record)
    else:
        payload = entry.clipboard_payload
    print(payload)
    return 0


def run_linkify(message_path: Path | None = None, escape_html: bool | None = None) -> int:
    """Print the enhanced markup of a failure message."""
    if message_path is None or str(message_path) == "-":
        message = sys.stdin.read()
    else:
        if not message_path.exists():
            print(f"Error: File not found: {message_path}", file=sys.stderr)
            return 1
        message = message_path.read_text(encoding="utf-8")

    sys.stdout.write(_linkifier(escape_html).enhance(message))
    return 0
