"""Derived report view consumed by presentation layers.

``build_view`` is recomputed from the immutable report on every query;
nothing here is cached.
"""

from __future__ import annotations

from dataclasses import dataclass

from testlens.core.identifiers import anchor_slug, clipboard_payload
from testlens.core.linkify import StackTraceLinkifier
from testlens.core.results import filter_results, flatten_results, group_results
from testlens.models import Query, TestResultRecord, TestRunReport

NO_MATCHES_MESSAGE = "No tests match your criteria"


@dataclass(frozen=True)
class GridCell:
    """One cell of the status overview, linking to a test anchor."""

    anchor: str
    passed: bool
    tooltip: str

    def to_dict(self) -> dict:
        return {"anchor": self.anchor, "passed": self.passed, "tooltip": self.tooltip}


@dataclass(frozen=True)
class TestEntry:
    """A test as displayed in the grouped listing."""

    __test__ = False

    record: TestResultRecord
    anchor: str
    clipboard_payload: str
    expandable: bool
    failure_messages: tuple[str, ...] = ()
    plain_messages: tuple[str, ...] = ()

    @property
    def title(self) -> str:
        return self.record.title

    @property
    def duration_ms(self) -> float | None:
        return self.record.duration_ms

    def to_dict(self) -> dict:
        return {
            "anchor": self.anchor,
            "title": self.record.title,
            "status": self.record.status.value,
            "duration_ms": self.record.duration_ms,
            "clipboard_payload": self.clipboard_payload,
            "expandable": self.expandable,
            "failure_messages": list(self.failure_messages),
        }


@dataclass(frozen=True)
class GroupView:
    """A group heading and its tests."""

    key: str
    entries: tuple[TestEntry, ...]

    def to_dict(self) -> dict:
        return {"key": self.key, "tests": [e.to_dict() for e in self.entries]}


@dataclass(frozen=True)
class ReportView:
    """Everything a presentation layer needs for one query."""

    query: Query
    grid: tuple[GridCell, ...]
    groups: tuple[GroupView, ...]
    summary: str = ""

    @property
    def no_matches(self) -> bool:
        """True when the query filtered out every test."""
        return not self.groups

    @property
    def entries(self) -> tuple[TestEntry, ...]:
        return tuple(entry for group in self.groups for entry in group.entries)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data: dict = {
            "query": {
                "show_passing": self.query.show_passing,
                "search_text": self.query.search_text,
            },
            "summary": self.summary,
            "grid": [c.to_dict() for c in self.grid],
            "groups": [g.to_dict() for g in self.groups],
            "no_matches": self.no_matches,
        }
        if self.no_matches:
            data["message"] = NO_MATCHES_MESSAGE
        return data


def build_entry(record: TestResultRecord, linkifier: StackTraceLinkifier) -> TestEntry:
    """Derive the display entry of a single record."""
    messages: tuple[str, ...] = ()
    plain: tuple[str, ...] = ()
    if not record.passed:
        messages = tuple(linkifier.enhance(m) for m in record.failure_messages)
        plain = tuple(linkifier.normalize(m) for m in record.failure_messages)

    return TestEntry(
        record=record,
        anchor=anchor_slug(record),
        clipboard_payload=clipboard_payload(record),
        expandable=record.has_failure_details,
        failure_messages=messages,
        plain_messages=plain,
    )


def build_view(
    report: TestRunReport,
    query: Query | None = None,
    linkifier: StackTraceLinkifier | None = None,
) -> ReportView:
    """Compute the view of a report for a query.

    The overview grid always covers every test; the grouped listing only
    the tests matching the query.
    """
    query = query or Query()
    linkifier = linkifier or StackTraceLinkifier()

    records = flatten_results(report)
    grid = tuple(
        GridCell(anchor=anchor_slug(r), passed=r.passed, tooltip=r.breadcrumb) for r in records
    )

    grouped = group_results(filter_results(records, query))
    groups = tuple(
        GroupView(key=key, entries=tuple(build_entry(r, linkifier) for r in bucket))
        for key, bucket in grouped.items()
    )

    return ReportView(query=query, grid=grid, groups=groups, summary=report.summary)


def find_entry(view: ReportView, anchor: str) -> TestEntry | None:
    """Find the entry for an anchor; on collisions the last one wins."""
    found = None
    for entry in view.entries:
        if entry.anchor == anchor:
            found = entry
    return found
