"""Conversion pipeline for HTML -> Markdown."""

from __future__ import annotations

import copy
import logging
import re

import httpx

from page2md.exceptions import ContentExtractionError, ConversionError
from page2md.html_utils import (
    find_content_root,
    find_page_title,
    strip_unwanted_elements,
)
from page2md.markdown import ListContext, MarkdownSerializer
from page2md.schemas import ConversionOptions

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


async def convert(
    root: Tag,
    options: ConversionOptions | None = None,
    *,
    title: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Convert a parsed HTML element and its subtree into Markdown.

    The caller's tree is left untouched: the walk runs on a sanitized clone.

    Args:
        root: The element holding the content to convert.
        options: Conversion options. Uses defaults if None.
        title: Optional document title, emitted as a level-1 heading first.
        client: Optional httpx.AsyncClient reused for image fetches.

    Returns:
        The Markdown text, with at most one blank line between blocks and no
        leading or trailing whitespace. Empty content yields "".

    Raises:
        ConversionError: If ``root`` is not a parsed HTML element.
    """
    if not isinstance(root, Tag):
        raise ConversionError(
            f"Expected a parsed HTML element as the document root, got {type(root).__name__}"
        )
    opts = options or ConversionOptions()

    clone = strip_unwanted_elements(copy.copy(root))
    serializer = MarkdownSerializer(opts, client=client)
    if opts.prefetch_images:
        await serializer.prefetch_images(clone)

    markdown = _title_heading(title)
    markdown += await serializer.serialize(clone, ListContext())
    return collapse_blank_lines(markdown)


async def convert_html(
    html: str | BeautifulSoup,
    options: ConversionOptions | None = None,
    *,
    title: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Parse a full HTML page, pick its main content and convert it.

    ``html`` may be markup or an already parsed ``BeautifulSoup`` document.
    The page's ``<title>`` is used when no ``title`` is given.

    Raises:
        ContentExtractionError: If the page yields no Markdown beyond the title.
    """
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "lxml")
    if title is None:
        title = find_page_title(soup)

    root = find_content_root(soup)
    markdown = await convert(root, options, title=title, client=client)
    if markdown == _title_heading(title).strip():
        raise ContentExtractionError("Could not extract any text content from the page.")
    logger.debug("Converted page into %d characters of Markdown", len(markdown))
    return markdown


def collapse_blank_lines(markdown: str) -> str:
    """Squeeze runs of three or more newlines to two and trim the result."""
    return _EXCESS_NEWLINES_RE.sub("\n\n", markdown).strip()


def _title_heading(title: str | None) -> str:
    title = " ".join((title or "").split())
    return f"# {title}\n\n" if title else ""
