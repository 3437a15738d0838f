"""Structured logging configuration for testlens."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(
    log_level: str = "WARNING",
    json_format: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format; otherwise, console format.
        stream: Output stream (defaults to sys.stderr so CLI output stays clean).
    """
    if stream is None:
        stream = sys.stderr

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,  # Disable caching for tests
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """
    Get a lazily configured logger instance.

    Args:
        name: Logger name (typically module name).

    Returns:
        structlog lazy proxy with the ``logger_name`` key set.
    """
    return structlog.get_logger(logger_name=name)
