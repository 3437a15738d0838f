"""Shared exceptions for the testlens package."""


class TestlensError(Exception):
    """Base class for errors raised by testlens."""

    __test__ = False


class MalformedReportError(TestlensError, ValueError):
    """Raised when a test report does not have the shape of a Jest JSON report.

    A malformed report means the producer is broken, so it is never
    partially recovered: the whole view fails.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)
