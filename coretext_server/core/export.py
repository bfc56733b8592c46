"""Clipboard copy and file export for finished summaries."""

import shutil
import subprocess
import sys
import tempfile
import uuid
from enum import Enum
from pathlib import Path

from .logging import get_logger

log = get_logger()


class SaveAction(Enum):
    """Ways to keep a summary."""

    AS_FILE = "asFile"
    AS_PLAIN_TEXT = "asPlainText"
    AS_MARKDOWN = "asMarkdown"

    @property
    def title(self) -> str:
        return {
            SaveAction.AS_FILE: "Save as file",
            SaveAction.AS_PLAIN_TEXT: "Copy as text",
            SaveAction.AS_MARKDOWN: "Save as Markdown",
        }[self]

    @property
    def subtitle(self) -> str:
        return {
            SaveAction.AS_FILE: "Export a document you can share or store.",
            SaveAction.AS_PLAIN_TEXT: "Copy the summary to the clipboard.",
            SaveAction.AS_MARKDOWN: "Keep headings, lists and formatting.",
        }[self]

    @property
    def extension(self) -> str | None:
        """File extension for exporting actions, None for clipboard copy."""
        return {
            SaveAction.AS_FILE: "txt",
            SaveAction.AS_PLAIN_TEXT: None,
            SaveAction.AS_MARKDOWN: "md",
        }[self]


def export_file(text: str, ext: str, directory: Path | str | None = None) -> Path | None:
    """Write ``text`` to ``Summary-<id>.<ext>`` as UTF-8.

    Args:
        text: Summary text.
        ext: File extension without the dot.
        directory: Target directory; the system temp directory by default.

    Returns:
        Path to the written file, or None if writing failed.
    """
    directory = Path(directory) if directory else Path(tempfile.gettempdir())
    path = directory / f"Summary-{uuid.uuid4().hex[:5]}.{ext.lstrip('.')}"
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        log.error(f"Failed to write summary file {path}: {e}")
        return None
    log.debug(f"Exported summary to {path}")
    return path


def get_clipboard_command() -> list[str] | None:
    """Get the clipboard copy command for this platform, if any."""
    if sys.platform == "darwin":
        return ["pbcopy"]
    if sys.platform == "win32":
        return ["clip"]

    for command in [["wl-copy"], ["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]]:
        if shutil.which(command[0]):
            return command
    return None


def copy_text(text: str) -> bool:
    """Copy ``text`` to the system clipboard.

    Returns:
        True if the clipboard command succeeded, False otherwise.
    """
    command = get_clipboard_command()
    if command is None:
        log.warning("No clipboard command available")
        return False
    try:
        result = subprocess.run(
            command,
            input=text.encode("utf-8"),
            capture_output=True,
            check=False,
            timeout=5,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        log.error(f"Clipboard copy failed: {e}")
        return False
    return result.returncode == 0
