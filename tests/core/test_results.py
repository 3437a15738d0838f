"""Tests for flattening, filtering and grouping of test results."""

from __future__ import annotations

import pytest

from testlens.core.results import (
    filter_results,
    flatten_results,
    group_results,
    matches_query,
)
from testlens.exceptions import MalformedReportError
from testlens.models import Query, SuiteRun, TestRunReport
from tests.factories import make_record, make_report


class TestFlattenResults:
    """Test suite for flatten_results."""

    def test_preserves_suite_then_in_suite_order(self):
        """Given several suite runs, records should come out suite by suite."""
        a, b, c, d = (make_record(title=t) for t in "abcd")
        report = make_report([[a, b], [], [c, d]])

        # When
        flat = flatten_results(report)

        # Then
        assert flat == (a, b, c, d)

    def test_keeps_duplicates(self):
        """Given identical records, no deduplication should happen."""
        record = make_record(title="same")
        report = make_report([[record], [record]])

        assert flatten_results(report) == (record, record)

    def test_empty_report(self):
        """Given a report without suites, the result should be empty."""
        assert flatten_results(TestRunReport()) == ()

    def test_suite_without_results_is_fatal(self):
        """Given a suite run missing its result sequence, should raise."""
        broken = SuiteRun(name="broken.test.ts", assertion_results=None)  # type: ignore[arg-type]
        report = TestRunReport(suite_runs=(broken,))

        with pytest.raises(MalformedReportError, match=r"testResults\[0\]"):
            flatten_results(report)


class TestFilterResults:
    """Test suite for filter_results."""

    def test_hides_passing_tests_when_toggle_is_off(self):
        """Given passing and failing tests, only failing ones should remain."""
        a = make_record(title="a", ancestors=["X"], status="passed")
        b = make_record(title="b", ancestors=["X"], status="failed")

        # When
        result = filter_results([a, b], Query(show_passing=False, search_text=""))

        # Then
        assert result == (b,)

    def test_non_passing_statuses_count_as_not_passed(self):
        """Given pending and todo tests, they should survive the toggle."""
        pending = make_record(title="p", status="pending", failure_messages=())
        todo = make_record(title="t", status="todo", failure_messages=())

        result = filter_results([pending, todo], Query(show_passing=False))

        assert result == (pending, todo)

    def test_empty_search_keeps_everything(self):
        records = [make_record(title="a"), make_record(title="b", status="failed")]

        assert filter_results(records, Query()) == tuple(records)

    def test_search_matches_title_case_insensitively(self):
        """Given mixed-case search text, title matching should ignore case."""
        hit = make_record(title="Resolves Peer Dependencies")
        miss = make_record(title="installs")

        result = filter_results([hit, miss], Query(search_text="peer DEP"))

        assert result == (hit,)

    def test_search_matches_any_ancestor(self):
        """Given search text matching a suite name, all its tests should match."""
        nested = make_record(title="x", ancestors=["Commands", "Install"])
        other = make_record(title="y", ancestors=["Paths"])

        result = filter_results([nested, other], Query(search_text="install"))

        assert result == (nested,)

    def test_search_is_plain_substring(self):
        """Given regex-looking search text, it should be matched literally."""
        literal = make_record(title="matches a.*b literally")
        regexy = make_record(title="aXXb")

        result = filter_results([literal, regexy], Query(search_text="a.*b"))

        assert result == (literal,)

    def test_both_predicates_must_hold(self):
        """Given a passing match and toggle off, the match should be hidden."""
        passing = make_record(title="needle", status="passed")
        failing = make_record(title="needle too", status="failed")
        unrelated = make_record(title="hay", status="failed")

        result = filter_results(
            [passing, failing, unrelated], Query(show_passing=False, search_text="needle")
        )

        assert result == (failing,)

    def test_no_matches_is_empty_tuple(self):
        records = [make_record(title="a")]

        assert filter_results(records, Query(search_text="zzz")) == ()

    def test_matches_query_ignores_suite_separator(self):
        """The group separator is not part of the searchable text."""
        record = make_record(title="t", ancestors=["A", "B"])

        assert not matches_query(record, Query(search_text="A › B"))


class TestGroupResults:
    """Test suite for group_results."""

    def test_first_seen_key_order(self):
        """Given ancestors X, Y, X, keys should be X then Y."""
        x1 = make_record(title="1", ancestors=["X"])
        y = make_record(title="2", ancestors=["Y"])
        x2 = make_record(title="3", ancestors=["X"])

        # When
        grouped = group_results([x1, y, x2])

        # Then
        assert grouped.keys() == ("X", "Y")
        assert grouped["X"] == (x1, x2)
        assert grouped["Y"] == (y,)

    def test_key_joins_ancestors_with_separator(self):
        record = make_record(ancestors=["Commands", "install", "lockfile"])

        grouped = group_results([record])

        assert list(grouped) == ["Commands › install › lockfile"]

    def test_root_level_tests_use_empty_key(self):
        record = make_record(ancestors=[])

        grouped = group_results([record])

        assert "" in grouped
        assert grouped[""] == (record,)

    def test_order_does_not_depend_on_key_sorting(self):
        """Given keys that sort differently, insertion order should win."""
        records = [make_record(ancestors=[k]) for k in ["zeta", "alpha", "mu", "alpha"]]

        grouped = group_results(records)

        assert grouped.keys() == ("zeta", "alpha", "mu")

    def test_items_follow_key_order(self):
        records = [make_record(title=str(i), ancestors=[k]) for i, k in enumerate("BAB")]

        items = group_results(records).items()

        assert [key for key, _ in items] == ["B", "A"]
        assert [r.title for r in items[0][1]] == ["0", "2"]

    def test_empty_input(self):
        grouped = group_results([])

        assert grouped.is_empty
        assert len(grouped) == 0
