"""Per-test identifiers: page anchors and clipboard payloads."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from testlens.logging import get_logger
from testlens.models import TestResultRecord

logger = get_logger(__name__)

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")
_REGEX_METACHARS = re.compile(r"[.*+?^${}()|\[\]\\]")


def make_anchor(ancestor_titles: Sequence[str], title: str) -> str:
    """Build the anchor slug for a test path.

    Collisions between distinct tests are possible; the last rendered
    element with a given id wins.
    """
    raw = f"{'-'.join(ancestor_titles)}-{title}".lower()
    return _NON_SLUG_RUN.sub("-", raw)


def anchor_slug(record: TestResultRecord) -> str:
    """Return the anchor slug for a record."""
    return make_anchor(record.ancestor_titles, record.title)


def make_clipboard_payload(ancestor_titles: Sequence[str], title: str) -> str:
    """Build a single-quoted argument selecting this test by name.

    Regex metacharacters are backslash-escaped so the name matches
    literally in a ``-t``/``--testNamePattern`` filter, then single
    quotes are escaped and the result is wrapped in single quotes.
    """
    name = f"{' '.join(ancestor_titles)} {title}"
    escaped = _REGEX_METACHARS.sub(lambda m: "\\" + m.group(0), name)
    escaped = escaped.replace("'", "\\'")
    return f"'{escaped}'"


def clipboard_payload(record: TestResultRecord) -> str:
    """Return the clipboard payload for a record."""
    return make_clipboard_payload(record.ancestor_titles, record.title)


def copy_to_clipboard(
    record: TestResultRecord,
    writer: Callable[[str], bool] | None = None,
) -> str:
    """Write the record's payload to the clipboard and return it.

    The write is best effort: a failing writer is logged, never raised.
    """
    if writer is None:
        from testlens.clipboard import write_clipboard

        writer = write_clipboard

    payload = clipboard_payload(record)
    try:
        written = writer(payload)
    except Exception as e:
        logger.warning("clipboard write raised", error=str(e))
        written = False

    if not written:
        logger.warning("clipboard write failed", test=record.title)
    return payload
