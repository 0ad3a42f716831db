"""Escape Markdown metacharacters in document text."""

from __future__ import annotations

import re

_MARKDOWN_SPECIAL_RE = re.compile(r"([\\`*_{}\[\]()#+\-.!])")


def escape_markdown(text: str | None) -> str:
    """Put a backslash in front of every Markdown-significant character.

    ``None`` maps to the empty string. Code content must not go through here.
    """
    if text is None:
        return ""
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)
