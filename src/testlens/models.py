"""Data models for Jest test reports and the views derived from them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

# Separator used for group keys and breadcrumbs
GROUP_SEPARATOR = " › "


class TestStatus(Enum):
    """Status of a single Jest assertion result."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    SKIPPED = "skipped"
    TODO = "todo"
    DISABLED = "disabled"
    FOCUSED = "focused"


@dataclass(frozen=True)
class TestLocation:
    """Source position of a test declaration."""

    __test__ = False

    line: int
    column: int


@dataclass(frozen=True)
class TestResultRecord:
    """One executed test, as reported by the test runner.

    ``ancestor_titles`` is the describe-block nesting, root first. The
    combination of ancestors and title is not guaranteed to be unique.
    """

    __test__ = False

    ancestor_titles: tuple[str, ...]
    title: str
    status: TestStatus
    duration_ms: float | None = None
    failure_messages: tuple[str, ...] = ()
    full_name: str | None = None
    location: TestLocation | None = None

    @property
    def passed(self) -> bool:
        """Check if the test passed."""
        return self.status is TestStatus.PASSED

    @property
    def group_key(self) -> str:
        """Return the joined ancestor path used to bucket this test."""
        return GROUP_SEPARATOR.join(self.ancestor_titles)

    @property
    def breadcrumb(self) -> str:
        """Return the human-readable path, used as the overview tooltip."""
        return f"{self.group_key}{GROUP_SEPARATOR}{self.title}"

    @property
    def has_failure_details(self) -> bool:
        """Check if there is failure output worth expanding."""
        return not self.passed and bool(self.failure_messages)


@dataclass(frozen=True)
class SuiteRun:
    """Results of a single test file."""

    name: str
    assertion_results: tuple[TestResultRecord, ...]
    status: str = "passed"
    message: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None


@dataclass(frozen=True)
class TestRunReport:
    """Parsed Jest report: the immutable input of every derived view."""

    __test__ = False

    suite_runs: tuple[SuiteRun, ...] = ()
    num_total_tests: int = 0
    num_passed_tests: int = 0
    num_failed_tests: int = 0
    num_pending_tests: int = 0
    num_todo_tests: int = 0
    success: bool = True
    start_time: datetime | None = None

    @property
    def summary(self) -> str:
        """Return human-readable summary of test results."""
        parts = []
        if self.num_passed_tests:
            parts.append(f"{self.num_passed_tests} passed")
        if self.num_failed_tests:
            parts.append(f"{self.num_failed_tests} failed")
        if self.num_pending_tests:
            parts.append(f"{self.num_pending_tests} pending")
        if self.num_todo_tests:
            parts.append(f"{self.num_todo_tests} todo")
        return ", ".join(parts) if parts else "No tests run"


@dataclass(frozen=True)
class Query:
    """Current search state: a pass/fail toggle and free-text search."""

    show_passing: bool = True
    search_text: str = ""


@dataclass(frozen=True)
class GroupedResults:
    """Records bucketed by group key.

    Keys iterate in first-seen order and each bucket keeps input order.
    """

    order: tuple[str, ...] = ()
    buckets: dict[str, tuple[TestResultRecord, ...]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.order

    def keys(self) -> tuple[str, ...]:
        return self.order

    def items(self) -> list[tuple[str, tuple[TestResultRecord, ...]]]:
        return [(key, self.buckets[key]) for key in self.order]

    def __getitem__(self, key: str) -> tuple[TestResultRecord, ...]:
        return self.buckets[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.order)

    def __len__(self) -> int:
        return len(self.order)

    def __contains__(self, key: object) -> bool:
        return key in self.buckets
