"""Serialize an HTML tree to Markdown with a recursive, context-aware walker."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field

import httpx

from page2md.escaping import escape_markdown
from page2md.exceptions import ImageResolutionError
from page2md.images import ImageResolver
from page2md.schemas import ConversionOptions

try:
    from bs4.element import NavigableString, PreformattedString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_LANGUAGE_CLASS_PREFIX = "language-"

_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_LIST_TAGS = frozenset({"ul", "ol"})

# Elements a browser does not lay out as ``display: inline`` by default.
_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "button", "caption",
        "center", "col", "colgroup", "dd", "details", "dialog", "dir", "div", "dl",
        "dt", "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
        "h4", "h5", "h6", "head", "header", "hgroup", "hr", "html", "input", "legend",
        "li", "link", "main", "menu", "meta", "nav", "noscript", "ol", "optgroup",
        "option", "p", "pre", "script", "section", "select", "style", "summary",
        "table", "tbody", "td", "template", "textarea", "tfoot", "th", "thead",
        "title", "tr", "ul",
    }
)


@dataclass
class ItemCounter:
    """Item number shared by every item of one list."""

    value: int = 0


@dataclass(frozen=True)
class ListContext:
    """List state threaded down the recursion.

    Copies of one list's context share the same ``counter`` cell, so items
    keep numbering correctly whatever sits between them and the list element.
    """

    list_depth: int = 0
    is_ordered: bool = False
    counter: ItemCounter = field(default_factory=ItemCounter)

    @property
    def item_index(self) -> int:
        return self.counter.value

    def enter_list(self, *, ordered: bool) -> ListContext:
        return ListContext(
            list_depth=self.list_depth + 1, is_ordered=ordered, counter=ItemCounter()
        )

    def next_item_number(self) -> int:
        """Return the 1-based number of the current item and advance the counter."""
        number = self.counter.value + 1
        self.counter.value += 1
        return number


class MarkdownSerializer:
    """Walk a (sanitized) tree depth-first and emit Markdown.

    Block handlers return self-contained fragments that carry their own
    vertical spacing; inline handlers compose within a line. Images are
    resolved in document order unless ``prefetch_images`` ran first.
    """

    def __init__(
        self,
        options: ConversionOptions,
        *,
        resolver: ImageResolver | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.options = options
        self.resolver = resolver or ImageResolver(options, client=client)
        self._resolved_images: dict[str, str | None] | None = None

    async def prefetch_images(self, root: Tag) -> None:
        """Resolve every image below ``root`` concurrently and remember the results."""
        # Images inside <pre> are never rendered.
        sources = list(
            dict.fromkeys(
                img.get("src")
                for img in root.find_all("img")
                if img.get("src") and img.find_parent("pre") is None
            )
        )
        results = await asyncio.gather(*(self._resolve_image(src) for src in sources))
        self._resolved_images = dict(zip(sources, results))

    async def serialize(self, node: Tag | NavigableString, context: ListContext) -> str:
        if isinstance(node, PreformattedString):
            # Comments, doctypes, CDATA and processing instructions.
            return ""
        if isinstance(node, NavigableString):
            return _serialize_text(node)
        if not isinstance(node, Tag):
            return ""

        name = node.name

        if name in _HEADING_TAGS:
            return await self._serialize_heading(node, context)

        if name == "p":
            return await self._serialize_paragraph(node, context)

        if name == "br":
            return "  \n"

        if name == "hr":
            return "\n---\n\n"

        if name == "a":
            return await self._serialize_link(node, context)

        if name == "img":
            return await self._serialize_image(node)

        if name in _LIST_TAGS:
            return await self.serialize_children(
                node, context.enter_list(ordered=name == "ol")
            )

        if name == "li":
            return await self._serialize_list_item(node, context)

        if name == "blockquote":
            return await self._serialize_blockquote(node, context)

        if name == "pre":
            return _serialize_preformatted(node)

        if name == "code":
            return _serialize_code(node)

        if name == "table":
            return await self._serialize_table(node, context)

        if name in {"strong", "b"}:
            return f"**{await self.serialize_children(node, context)}**"

        if name in {"em", "i"}:
            return f"*{await self.serialize_children(node, context)}*"

        if name in {"del", "s", "strike"}:
            return f"~~{await self.serialize_children(node, context)}~~"

        return await self.serialize_children(node, context)

    async def serialize_children(self, node: Tag, context: ListContext) -> str:
        parts: list[str] = []
        for child in node.children:
            parts.append(await self.serialize(child, context))
        return "".join(parts)

    async def _serialize_heading(self, node: Tag, context: ListContext) -> str:
        level = int(node.name[1])
        content = (await self.serialize_children(node, context)).strip()
        return f"\n{'#' * level} {content}\n\n"

    async def _serialize_paragraph(self, node: Tag, context: ListContext) -> str:
        content = (await self.serialize_children(node, context)).strip()
        return f"\n{content}\n\n" if content else ""

    async def _serialize_link(self, node: Tag, context: ListContext) -> str:
        if not self.options.include_links:
            return await self.serialize_children(node, context)
        text = (await self.serialize_children(node, context)).strip()
        href = node.get("href")
        return f"[{text}]({href})" if href else text

    async def _serialize_image(self, node: Tag) -> str:
        src = node.get("src")
        if not src:
            return ""
        alt = escape_markdown(node.get("alt") or "")
        title = escape_markdown(node.get("title") or "")

        resolved = await self._resolve(src)
        if resolved is None:
            return ""

        markdown = f"![{alt}]({resolved}"
        if title:
            markdown += f' "{title}"'
        return markdown + ")"

    async def _serialize_list_item(self, node: Tag, context: ListContext) -> str:
        indent = "  " * (context.list_depth - 1)
        number = context.next_item_number()
        prefix = f"{number}. " if context.is_ordered else "* "

        # Nested lists carry their own depth-based indentation and start on a
        # new line. Text around them stays in document order, with the first
        # run on the item line and later runs as continuation lines.
        parts: list[str] = []
        run: list[str] = []
        lead: str | None = f"{indent}{prefix}"
        for child in node.children:
            if isinstance(child, Tag) and child.name in _LIST_TAGS:
                parts.append(_item_lines(run, lead, indent))
                run = []
                lead = None
                parts.append(await self.serialize(child, context))
            else:
                run.append(await self.serialize(child, context))
        parts.append(_item_lines(run, lead, indent))
        return "".join(parts)

    async def _serialize_blockquote(self, node: Tag, context: ListContext) -> str:
        content = (await self.serialize_children(node, context)).strip()
        quoted = "\n".join(f"> {line}" for line in content.split("\n"))
        return f"\n{quoted}\n\n"

    async def _serialize_table(self, table: Tag, context: ListContext) -> str:
        rows = [row for row in table.find_all("tr") if row.find_parent("table") is table]
        if not rows:
            return ""

        header_row = next((row for row in rows if _in_thead(row)), rows[0])
        body_rows = [row for row in rows if row is not header_row and not _in_thead(row)]

        headers = await self._serialize_row(header_row, context)
        lines = [
            "| " + " | ".join(headers) + " |",
            "| " + " | ".join("---" for _ in headers) + " |",
        ]
        for row in body_rows:
            cells = await self._serialize_row(row, context)
            lines.append("| " + " | ".join(cells) + " |")
        return "\n" + "\n".join(lines) + "\n\n"

    async def _serialize_row(self, row: Tag, context: ListContext) -> list[str]:
        cells: list[str] = []
        for cell in row.find_all(["th", "td"], recursive=False):
            cells.append((await self.serialize_children(cell, context)).strip())
        return cells

    async def _resolve(self, src: str) -> str | None:
        if self._resolved_images is not None and src in self._resolved_images:
            return self._resolved_images[src]
        return await self._resolve_image(src)

    async def _resolve_image(self, src: str) -> str | None:
        try:
            return await self.resolver.resolve(src)
        except ImageResolutionError as exc:
            logger.warning("Skipping image %s: %s", _shorten(src), exc)
            return None


def _serialize_text(node: NavigableString) -> str:
    if node.find_parent(["pre", "code"]) is not None:
        return str(node)
    text = _WHITESPACE_RE.sub(" ", str(node))
    if text == " ":
        # Block siblings already supply their own spacing.
        if _is_block_element(node.previous_sibling) or _is_block_element(node.next_sibling):
            return ""
        return " "
    return escape_markdown(text)


def _item_lines(run: list[str], lead: str | None, indent: str) -> str:
    content = "".join(run).strip().replace("\n", f"\n{indent}  ")
    if lead is not None:
        return f"{lead}{content}\n"
    return f"{indent}  {content}\n" if content else ""


def _serialize_preformatted(node: Tag) -> str:
    language = ""
    code = node.find("code")
    if code is not None:
        for cls in code.get("class", []):
            if cls.startswith(_LANGUAGE_CLASS_PREFIX):
                language = cls[len(_LANGUAGE_CLASS_PREFIX) :]
                break
    return f"\n```{language}\n{node.get_text()}\n```\n\n"


def _serialize_code(node: Tag) -> str:
    if node.find_parent("pre") is not None:
        return node.get_text()
    return f"`{node.get_text()}`"


def _is_block_element(node: object) -> bool:
    return isinstance(node, Tag) and node.name in _BLOCK_TAGS


def _in_thead(row: Tag) -> bool:
    return row.parent is not None and row.parent.name == "thead"


def _shorten(src: str, limit: int = 80) -> str:
    return src if len(src) <= limit else src[:limit] + "..."
