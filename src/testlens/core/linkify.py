"""Rewriting of failure messages into linked markup.

Two global passes run over each message:

1. Normalization: absolute paths ending in the project root directory are
   replaced by a fixed placeholder root, hiding local checkout locations.
2. Linkification: ``<placeholder>/<marker>/<subpath>:<line>:<column>``
   references become ``<a>`` links to the remote source browser. The link
   text is the matched reference; the column is not part of the target.

The output is markup meant to be rendered as trusted HTML. Messages from
untrusted sources should be processed with ``escape_html=True``.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from testlens.config import Settings

# Characters allowed in a path segment of a stack trace reference
_PATH_CHARS = r"[a-zA-Z0-9/_.-]+"


@dataclass(frozen=True)
class Segment:
    """A piece of a rewritten message: literal text, or a link if href is set."""

    text: str
    href: str | None = None

    @property
    def is_link(self) -> bool:
        return self.href is not None


class StackTraceLinkifier:
    """Normalizes and linkifies source references in failure messages."""

    def __init__(
        self,
        project_root_name: str = "berry",
        placeholder_root: str = "/path/to/berry",
        source_marker: str = "packages",
        source_url_template: str = "https://github.com/yarnpkg/berry/blob/master/{path}#L{line}",
        link_class: str = "text-red-800 underline",
        escape_html: bool = False,
    ):
        self.placeholder_root = placeholder_root.rstrip("/")
        self.source_url_template = source_url_template
        self.link_class = link_class
        self.escape_html = escape_html

        self._root_pattern = re.compile(f"/{_PATH_CHARS}/{re.escape(project_root_name)}/")
        self._reference_pattern = re.compile(
            f"{re.escape(self.placeholder_root)}/"
            f"({re.escape(source_marker)}/{_PATH_CHARS}):([0-9]+):([0-9]+)"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> StackTraceLinkifier:
        """Create a linkifier from application settings."""
        return cls(
            project_root_name=settings.project_root_name,
            placeholder_root=settings.placeholder_root,
            source_marker=settings.source_marker,
            source_url_template=settings.source_url_template,
            link_class=settings.link_class,
            escape_html=settings.escape_html,
        )

    def normalize(self, message: str) -> str:
        """Replace local absolute roots with the placeholder root."""
        return self._root_pattern.sub(lambda _: f"{self.placeholder_root}/", message)

    def source_url(self, path: str, line: str | int) -> str:
        """Build the remote source browser URL for a file and line."""
        return self.source_url_template.format(path=path, line=line)

    def segments(self, message: str) -> Iterator[Segment]:
        """Split a normalized message into literal and link segments."""
        normalized = self.normalize(message)
        position = 0

        for match in self._reference_pattern.finditer(normalized):
            if match.start() > position:
                yield Segment(normalized[position : match.start()])
            yield Segment(match.group(0), href=self.source_url(match.group(1), match.group(2)))
            position = match.end()

        if position < len(normalized):
            yield Segment(normalized[position:])

    def render_segment(self, segment: Segment) -> str:
        """Render a segment as markup."""
        text = html.escape(segment.text, quote=False) if self.escape_html else segment.text
        if not segment.is_link:
            return text

        href = html.escape(segment.href, quote=True) if self.escape_html else segment.href
        return f'<a class="{self.link_class}" href="{href}" target="_blank">{text}</a>'

    def enhance(self, message: str) -> str:
        """Normalize and linkify a failure message, returning markup."""
        return "".join(self.render_segment(s) for s in self.segments(message))


def enhance_message(message: str, settings: Settings | None = None) -> str:
    """Enhance a failure message using the configured linkifier."""
    if settings is None:
        from testlens.config import get_settings

        settings = get_settings()
    return StackTraceLinkifier.from_settings(settings).enhance(message)
