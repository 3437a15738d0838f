"""testlens - browse, filter and deep-link Jest test reports."""

__version__ = "0.3.0"

from testlens.core.identifiers import anchor_slug, clipboard_payload
from testlens.core.linkify import StackTraceLinkifier, enhance_message
from testlens.core.results import filter_results, flatten_results, group_results
from testlens.core.view import NO_MATCHES_MESSAGE, ReportView, build_view
from testlens.exceptions import MalformedReportError, TestlensError
from testlens.models import (
    GroupedResults,
    Query,
    SuiteRun,
    TestResultRecord,
    TestRunReport,
    TestStatus,
)
from testlens.parsers.jest import JestReportParser, parse_jest_report

__all__ = [
    "GroupedResults",
    "JestReportParser",
    "MalformedReportError",
    "NO_MATCHES_MESSAGE",
    "Query",
    "ReportView",
    "StackTraceLinkifier",
    "SuiteRun",
    "TestResultRecord",
    "TestRunReport",
    "TestStatus",
    "TestlensError",
    "anchor_slug",
    "build_view",
    "clipboard_payload",
    "enhance_message",
    "filter_results",
    "flatten_results",
    "group_results",
    "parse_jest_report",
]
