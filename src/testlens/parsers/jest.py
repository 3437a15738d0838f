"""Parser for Jest JSON test reports (``jest --json``).

The report is a ``FormattedTestResults`` object: a ``testResults`` list
with one entry per test file, each carrying an ``assertionResults`` list.
Shape violations are fatal and raise ``MalformedReportError``.
"""

from __future__ import annotations

import json
import math
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from testlens.exceptions import MalformedReportError
from testlens.logging import get_logger
from testlens.models import SuiteRun, TestLocation, TestResultRecord, TestRunReport, TestStatus

logger = get_logger(__name__)


class JestReportParser:
    """Parser for Jest JSON reports."""

    @staticmethod
    def parse_file(file_path: Path | str) -> TestRunReport:
        """Parse a Jest JSON report from file.

        Args:
            file_path: Path to the report file.

        Returns:
            TestRunReport with parsed data.

        Raises:
            FileNotFoundError: If report file doesn't exist.
            MalformedReportError: If the file is not a valid Jest report.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Report file not found: {path}")

        logger.debug("loading report", path=str(path))
        return JestReportParser.parse_string(path.read_text(encoding="utf-8"))

    @staticmethod
    def parse_string(content: str) -> TestRunReport:
        """Parse a Jest JSON report from string."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedReportError(f"Invalid JSON in report: {e}") from e
        return JestReportParser.parse_dict(data)

    @staticmethod
    def parse_dict(data: Any) -> TestRunReport:
        """Build a TestRunReport from already-decoded JSON."""
        if not isinstance(data, dict):
            raise MalformedReportError("Report must be a JSON object")

        raw_suites = _require_list(data, "testResults", "report")
        suite_runs = tuple(
            _parse_suite_run(suite, f"testResults[{i}]") for i, suite in enumerate(raw_suites)
        )

        records = [record for suite in suite_runs for record in suite.assertion_results]
        counted_passed = sum(1 for r in records if r.passed)
        counted_failed = sum(1 for r in records if r.status is TestStatus.FAILED)
        counted_pending = sum(
            1 for r in records if r.status in (TestStatus.PENDING, TestStatus.SKIPPED)
        )
        counted_todo = sum(1 for r in records if r.status is TestStatus.TODO)

        report = TestRunReport(
            suite_runs=suite_runs,
            num_total_tests=_int_field(data, "numTotalTests", len(records)),
            num_passed_tests=_int_field(data, "numPassedTests", counted_passed),
            num_failed_tests=_int_field(data, "numFailedTests", counted_failed),
            num_pending_tests=_int_field(data, "numPendingTests", counted_pending),
            num_todo_tests=_int_field(data, "numTodoTests", counted_todo),
            success=bool(data.get("success", counted_failed == 0)),
            start_time=_parse_timestamp(data.get("startTime")),
        )
        logger.debug(
            "report parsed",
            suites=len(suite_runs),
            tests=len(records),
            summary=report.summary,
        )
        return report


def parse_jest_report(report_path: Path) -> TestRunReport:
    """Parse a Jest JSON report file.

    Args:
        report_path: Path to the Jest JSON report file.

    Returns:
        TestRunReport with parsed test results.
    """
    return JestReportParser.parse_file(report_path)


def _require_list(data: dict[str, Any], key: str, where: str) -> list[Any]:
    """Return ``data[key]``, failing if it is missing or not a list."""
    if key not in data or data[key] is None:
        raise MalformedReportError(f"Missing required field '{key}'", where)
    value = data[key]
    if not isinstance(value, list):
        raise MalformedReportError(f"Field '{key}' must be a list", where)
    return value


def _int_field(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse Jest timestamps (epoch milliseconds)."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    try:
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def _parse_suite_run(suite: Any, where: str) -> SuiteRun:
    """Parse one ``testResults`` entry."""
    if not isinstance(suite, dict):
        raise MalformedReportError("Suite run must be an object", where)

    raw_results = _require_list(suite, "assertionResults", where)
    results = tuple(
        _parse_record(result, f"{where}.assertionResults[{i}]")
        for i, result in enumerate(raw_results)
    )

    return SuiteRun(
        name=str(suite.get("name", "")),
        assertion_results=results,
        status=str(suite.get("status", "passed")),
        message=str(suite.get("message") or ""),
        start_time=_parse_timestamp(suite.get("startTime")),
        end_time=_parse_timestamp(suite.get("endTime")),
    )


def _parse_record(result: Any, where: str) -> TestResultRecord:
    """Parse one assertion result into a TestResultRecord."""
    if not isinstance(result, dict):
        raise MalformedReportError("Assertion result must be an object", where)

    ancestors = _require_list(result, "ancestorTitles", where)
    if not all(isinstance(a, str) for a in ancestors):
        raise MalformedReportError("Field 'ancestorTitles' must contain strings", where)

    title = result.get("title")
    if not isinstance(title, str):
        raise MalformedReportError("Missing required field 'title'", where)

    raw_status = result.get("status")
    try:
        status = TestStatus(raw_status)
    except ValueError as e:
        raise MalformedReportError(f"Unknown test status {raw_status!r}", where) from e

    duration = result.get("duration")
    if (
        isinstance(duration, bool)
        or not isinstance(duration, int | float)
        or not math.isfinite(duration)
        or duration < 0
    ):
        duration = None

    messages = result.get("failureMessages") or []
    if not isinstance(messages, list):
        raise MalformedReportError("Field 'failureMessages' must be a list", where)

    return TestResultRecord(
        ancestor_titles=tuple(ancestors),
        title=title,
        status=status,
        duration_ms=duration,
        failure_messages=tuple(str(m) for m in messages),
        full_name=result.get("fullName"),
        location=_parse_location(result.get("location")),
    )


def _parse_location(value: Any) -> TestLocation | None:
    if not isinstance(value, dict):
        return None
    line, column = value.get("line"), value.get("column")
    if not isinstance(line, int) or not isinstance(column, int):
        return None
    return TestLocation(line=line, column=column)
