"""Shared HTML utilities: content-root selection and noise removal."""

from __future__ import annotations

from page2md.exceptions import ContentExtractionError

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


# Tried in order; the first match is treated as the page's main content.
CONTENT_ROOT_SELECTORS = (
    "#js_content",
    "article",
    "main",
    ".main-content",
    ".content",
    "#content",
    ".post",
    ".entry",
    ".post-content",
    ".entry-content",
)

UNWANTED_SELECTORS = (
    "script",
    "style",
    "noscript",
    "iframe",
    "nav",
    "footer",
    "aside",
    ".sidebar",
    ".ads",
    ".comments",
    ".navigation",
    ".menu",
    '[role="banner"]',
    '[role="navigation"]',
    '[role="advertisement"]',
)


def find_content_root(soup: BeautifulSoup) -> Tag:
    """Find the element holding the main content of a web page.

    Searches in the following order:
    1. The first element matching one of ``CONTENT_ROOT_SELECTORS``
    2. The <body> element
    3. The soup itself, if it contains any element

    Raises:
        ContentExtractionError: If the document has no element at all.
    """
    for selector in CONTENT_ROOT_SELECTORS:
        root = soup.select_one(selector)
        if root is not None:
            return root
    if soup.body:
        return soup.body
    if soup.find(True) is not None:
        return soup
    raise ContentExtractionError("No content element found in the document.")


def strip_unwanted_elements(root: Tag) -> Tag:
    """Remove scripts, navigation, ads and similar noise below ``root`` in place."""
    for selector in UNWANTED_SELECTORS:
        for tag in root.select(selector):
            # Nested matches go away with their ancestor.
            if not tag.decomposed:
                tag.decompose()
    return root


def find_page_title(soup: BeautifulSoup) -> str | None:
    """Return the whitespace-normalized ``<title>`` text, if the page has one."""
    if soup.title is None:
        return None
    return soup.title.get_text(" ", strip=True) or None
