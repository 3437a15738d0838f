"""Best-effort system clipboard writes through platform tools."""

from __future__ import annotations

import shutil
import subprocess

from testlens.logging import get_logger

logger = get_logger(__name__)

# Tried in order; the first one found on PATH is used
CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


def find_clipboard_command() -> tuple[str, ...] | None:
    """Return the first available clipboard command, if any."""
    for command in CLIPBOARD_COMMANDS:
        if shutil.which(command[0]):
            return command
    return None


def write_clipboard(text: str, timeout: float = 5.0) -> bool:
    """
    Write text to the system clipboard.

    Args:
        text: Text to copy.
        timeout: Seconds to wait for the clipboard tool.

    Returns:
        True if the text was written, False otherwise. Never raises.
    """
    command = find_clipboard_command()
    if command is None:
        logger.warning("no clipboard tool available")
        return False

    try:
        result = subprocess.run(
            list(command),
            input=text,
            text=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("clipboard tool failed", command=command[0], error=str(e))
        return False

    if result.returncode != 0:
        logger.warning(
            "clipboard tool failed",
            command=command[0],
            returncode=result.returncode,
        )
        return False

    logger.debug("copied to clipboard", command=command[0], length=len(text))
    return True
