"""page2md: convert web pages into Markdown."""

from page2md.conversion import convert, convert_html
from page2md.exceptions import (
    ContentExtractionError,
    ConversionError,
    FetchError,
    ImageResolutionError,
    Page2mdError,
    SvgEncodingError,
)
from page2md.output import compose_document, save_markdown
from page2md.schemas import ConversionOptions, ImageOption

__all__ = [
    "ContentExtractionError",
    "ConversionError",
    "ConversionOptions",
    "FetchError",
    "ImageOption",
    "ImageResolutionError",
    "Page2mdError",
    "SvgEncodingError",
    "compose_document",
    "convert",
    "convert_html",
    "save_markdown",
]
