"""Tests for the best-effort clipboard writer."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

from testlens.clipboard import find_clipboard_command, write_clipboard


def _which(available: set[str]):
    return lambda name: f"/usr/bin/{name}" if name in available else None


class TestFindClipboardCommand:
    def test_prefers_first_available_tool(self):
        with patch("testlens.clipboard.shutil.which", side_effect=_which({"xclip", "xsel"})):
            assert find_clipboard_command() == ("xclip", "-selection", "clipboard")

    def test_none_when_nothing_installed(self):
        with patch("testlens.clipboard.shutil.which", return_value=None):
            assert find_clipboard_command() is None


class TestWriteClipboard:
    """Test suite for write_clipboard."""

    def test_writes_text_to_tool_stdin(self):
        with (
            patch("testlens.clipboard.shutil.which", side_effect=_which({"pbcopy"})),
            patch("testlens.clipboard.subprocess.run") as mock_run,
        ):
            mock_run.return_value = MagicMock(returncode=0)

            assert write_clipboard("'Suite test'") is True

        args, kwargs = mock_run.call_args
        assert args[0] == ["pbcopy"]
        assert kwargs["input"] == "'Suite test'"

    def test_no_tool_returns_false(self):
        with patch("testlens.clipboard.shutil.which", return_value=None):
            assert write_clipboard("x") is False

    def test_failing_tool_returns_false(self):
        with (
            patch("testlens.clipboard.shutil.which", side_effect=_which({"wl-copy"})),
            patch("testlens.clipboard.subprocess.run", return_value=MagicMock(returncode=1)),
        ):
            assert write_clipboard("x") is False

    def test_timeout_returns_false(self):
        with (
            patch("testlens.clipboard.shutil.which", side_effect=_which({"xsel"})),
            patch(
                "testlens.clipboard.subprocess.run",
                side_effect=subprocess.TimeoutExpired(cmd="xsel", timeout=5),
            ),
        ):
            assert write_clipboard("x") is False

    def test_os_error_returns_false(self):
        with (
            patch("testlens.clipboard.shutil.which", side_effect=_which({"clip"})),
            patch("testlens.clipboard.subprocess.run", side_effect=PermissionError("denied")),
        ):
            assert write_clipboard("x") is False
