"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from testlens.config import get_settings
from testlens.logging import configure_logging
from testlens.models import TestRunReport
from testlens.parsers.jest import JestReportParser

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep TESTLENS_* variables from the environment out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("TESTLENS_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    configure_logging(log_level="WARNING")
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_report_path() -> Path:
    """Path to sample Jest report fixture."""
    return FIXTURES_DIR / "jest_report.json"


@pytest.fixture
def sample_report(sample_report_path: Path) -> TestRunReport:
    """Parsed sample Jest report."""
    return JestReportParser.parse_file(sample_report_path)
