"""Command-based clipboard adapter.

Implements ClipboardPort by piping text into a platform clipboard tool
(pbcopy, wl-copy, xclip, xsel or clip). The first tool found on PATH is
used unless a command is configured explicitly.
"""

import asyncio
import logging
import shlex
import shutil
import subprocess

from simpleshop.core.ports import ClipboardPort

logger = logging.getLogger(__name__)

CANDIDATE_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


def detect_clipboard_command() -> tuple[str, ...] | None:
    """Return the first available clipboard command, or None."""
    for command in CANDIDATE_COMMANDS:
        if shutil.which(command[0]):
            return command
    return None


class CommandClipboardAdapter(ClipboardPort):
    """Writes clipboard text through an external command's stdin."""

    def __init__(self, command: str = "", timeout_seconds: float = 5.0):
        """Initialize the clipboard adapter.

        Args:
            command: Shell-style command line to run. Empty means auto-detect.
            timeout_seconds: How long to wait for the command to finish.
        """
        self.command: tuple[str, ...] | None = (
            tuple(shlex.split(command)) if command else detect_clipboard_command()
        )
        self.timeout_seconds = timeout_seconds

    async def write_text(self, text: str) -> None:
        """Pipe text into the clipboard command.

        Raises:
            RuntimeError: If no clipboard command is available or it fails.
            TimeoutError: If the command does not finish in time.
        """
        if not self.command:
            raise RuntimeError("No clipboard command available")

        command = list(self.command)

        def _run_clipboard_command() -> None:
            """Synchronous wrapper for subprocess call."""
            try:
                result = subprocess.run(
                    command,
                    input=text,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout_seconds,
                )
            except subprocess.TimeoutExpired as e:
                raise TimeoutError(
                    f"Clipboard command timed out after {self.timeout_seconds} seconds"
                ) from e
            except OSError as e:
                raise RuntimeError(f"Clipboard command could not start: {e}") from e

            if result.returncode != 0:
                raise RuntimeError(
                    f"Clipboard command failed: {result.stderr.strip() or result.returncode}"
                )

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _run_clipboard_command)
        logger.debug(f"Copied {len(text)} characters with {command[0]}")
