"""Command-line entry point: convert a saved HTML page to Markdown."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from page2md.config import PAGE2MD_LOG_LEVEL, PAGE2MD_OUTPUT_DIR
from page2md.conversion import convert_html
from page2md.exceptions import Page2mdError
from page2md.html_utils import find_page_title
from page2md.output import compose_document, save_markdown
from page2md.schemas import ConversionOptions, ImageOption

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="page2md", description="Convert an HTML page into a Markdown document."
    )
    parser.add_argument("file", help="HTML file to convert ('-' reads standard input)")
    parser.add_argument("--base-url", help="URL the page was loaded from, for relative image paths")
    parser.add_argument(
        "--images",
        choices=[option.value for option in ImageOption],
        default=ImageOption.BASE64.value,
        help="Embed images as Base64 data URIs or link to them",
    )
    parser.add_argument("--no-links", action="store_true", help="Keep link text but drop link targets")
    parser.add_argument(
        "--prefetch-images", action="store_true", help="Download all images concurrently"
    )
    parser.add_argument("--title", help="Document title (defaults to the page's <title>)")
    parser.add_argument("--summary-file", help="Markdown summary to put in front of the page")
    parser.add_argument("--save", action="store_true", help="Write <title>.md instead of printing")
    parser.add_argument(
        "--output-dir", default=PAGE2MD_OUTPUT_DIR, help="Directory used with --save"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=PAGE2MD_LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        html = load_html(args.file)
        summary = Path(args.summary_file).read_text(encoding="utf-8") if args.summary_file else None
    except (OSError, UnicodeDecodeError) as exc:
        parser.error(str(exc))

    options = ConversionOptions(
        image_option=ImageOption(args.images),
        include_links=not args.no_links,
        base_url=args.base_url,
        prefetch_images=args.prefetch_images,
    )
    soup = BeautifulSoup(html, "lxml")
    title = args.title or find_page_title(soup)

    try:
        markdown = asyncio.run(convert_html(soup, options, title=title))
        document = compose_document(markdown, summary)
        if args.save:
            path = asyncio.run(save_markdown(document, title, Path(args.output_dir)))
            print(path)
        else:
            print(document)
    except Page2mdError as exc:
        logger.error("Conversion failed: %s", exc)
        return 1
    return 0


def load_html(file_path: str) -> str:
    if file_path == "-":
        return sys.stdin.read()
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"HTML file not found: {path}")
    return path.read_text(encoding="utf-8")


if __name__ == "__main__":
    sys.exit(main())
