"""Test report parsers."""

from testlens.parsers.jest import JestReportParser, parse_jest_report

__all__ = ["JestReportParser", "parse_jest_report"]
