"""Flattening, filtering and grouping of test results.

All functions are pure: they never mutate the report and the same
(report, query) pair always yields the same output.
"""

from __future__ import annotations

from collections.abc import Iterable

from testlens.exceptions import MalformedReportError
from testlens.models import GroupedResults, Query, TestResultRecord, TestRunReport


def flatten_results(report: TestRunReport) -> tuple[TestResultRecord, ...]:
    """Flatten suite runs into one sequence, suite order then in-suite order.

    Raises:
        MalformedReportError: If a suite run has no result sequence.
    """
    records: list[TestResultRecord] = []
    for i, suite in enumerate(report.suite_runs):
        if suite.assertion_results is None:
            raise MalformedReportError(
                "Suite run has no assertion results", f"testResults[{i}]"
            )
        records.extend(suite.assertion_results)
    return tuple(records)


def matches_query(record: TestResultRecord, query: Query) -> bool:
    """Check a record against the status toggle and the search text."""
    if not (query.show_passing or not record.passed):
        return False

    if query.search_text == "":
        return True

    term = query.search_text.lower()
    return term in record.title.lower() or any(
        term in ancestor.lower() for ancestor in record.ancestor_titles
    )


def filter_results(
    records: Iterable[TestResultRecord], query: Query
) -> tuple[TestResultRecord, ...]:
    """Keep the records matching the query, in input order.

    An empty result is valid and means "no matches".
    """
    return tuple(record for record in records if matches_query(record, query))


def group_results(records: Iterable[TestResultRecord]) -> GroupedResults:
    """Partition records by group key.

    Key order is the order in which each key is first seen; each bucket
    keeps input order.
    """
    order: list[str] = []
    buckets: dict[str, list[TestResultRecord]] = {}

    for record in records:
        key = record.group_key
        if key not in buckets:
            buckets[key] = []
            order.append(key)
        buckets[key].append(record)

    return GroupedResults(
        order=tuple(order),
        buckets={key: tuple(buckets[key]) for key in order},
    )
