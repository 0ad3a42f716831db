"""Assemble and save the final Markdown document."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from page2md.config import PAGE2MD_SUMMARY_HEADING

logger = logging.getLogger(__name__)

_FORBIDDEN_FILENAME_CHARS_RE = re.compile(r'[\\/:*?"<>|]')
_WHITESPACE_RE = re.compile(r"\s+")
_DEFAULT_FILENAME = "untitled"
_MARKDOWN_SUFFIX = ".md"


def compose_document(markdown: str, summary: str | None = None) -> str:
    """Prefix the converted page with a summary block when one exists."""
    if not summary or not summary.strip():
        return markdown
    return f"## {PAGE2MD_SUMMARY_HEADING}\n\n{summary}\n\n---\n\n{markdown}"


def sanitize_filename(name: str) -> str:
    """Replace characters no common filesystem accepts and tidy whitespace."""
    name = _FORBIDDEN_FILENAME_CHARS_RE.sub("_", name)
    return _WHITESPACE_RE.sub(" ", name).strip()


def markdown_filename(title: str | None) -> str:
    return (sanitize_filename(title or "") or _DEFAULT_FILENAME) + _MARKDOWN_SUFFIX


async def save_markdown(markdown: str, title: str | None, directory: Path) -> Path:
    """Write ``markdown`` to ``directory/<sanitized title>.md``, replacing any existing file.

    Args:
        markdown: The document to write.
        title: Page title the filename is derived from.
        directory: Target directory, created if missing.

    Returns:
        Path of the written file.
    """
    path = directory / markdown_filename(title)
    await mkdir_async(directory, parents=True, exist_ok=True)
    await write_text_async(path, markdown)
    logger.info("Saved Markdown to %s", path)
    return path


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file asynchronously using a thread pool."""
    await asyncio.to_thread(path.write_text, content, encoding=encoding)


async def mkdir_async(
    path: Path, parents: bool = False, exist_ok: bool = False
) -> None:
    """Create a directory asynchronously using a thread pool."""
    await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)
