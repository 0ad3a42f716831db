"""Resolve image sources into references that can be written into Markdown."""

from __future__ import annotations

import base64
import logging
from urllib.parse import unquote, urljoin, urlsplit

import httpx

from page2md.exceptions import FetchError, ImageResolutionError, SvgEncodingError
from page2md.http_utils import fetch_resource
from page2md.schemas import ConversionOptions, ImageOption

logger = logging.getLogger(__name__)

_DATA_SCHEME = "data:"
_SVG_MEDIA_TYPE = "image/svg+xml"
_FALLBACK_MEDIA_TYPE = "application/octet-stream"
_FETCHABLE_SCHEMES = {"http", "https"}


class ImageResolver:
    """Turn an ``<img src>`` value into either a URL or a Base64 data URI.

    One resolver serves one conversion call. When an ``httpx.AsyncClient`` is
    given it is reused for every image fetch; otherwise each fetch opens its
    own client.
    """

    def __init__(
        self,
        options: ConversionOptions,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.options = options
        self.client = client

    async def resolve(self, src: str) -> str:
        """Resolve ``src`` according to the configured image option.

        Raises:
            SvgEncodingError: If a URL-encoded SVG data URI cannot be re-encoded.
            ImageResolutionError: If the URL is malformed or the image cannot be
                fetched or encoded.
        """
        if is_data_uri(src):
            if is_urlencoded_svg(src):
                return reencode_svg_data_uri(src)
            return src

        try:
            absolute_url = absolutize_url(src, self.options.base_url)
            scheme = urlsplit(absolute_url).scheme.lower()
        except ValueError as exc:
            raise ImageResolutionError(f"Malformed image URL {src!r}: {exc}") from exc
        if self.options.image_option is ImageOption.HTTP:
            return absolute_url

        if scheme not in _FETCHABLE_SCHEMES:
            raise ImageResolutionError(f"Cannot fetch image without an http(s) URL: {absolute_url}")

        try:
            resource = await fetch_resource(absolute_url, client=self.client)
        except (FetchError, httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ImageResolutionError(f"Failed to fetch image {absolute_url}: {exc}") from exc

        logger.debug("Embedded %d bytes from %s", len(resource.content), absolute_url)
        return encode_data_uri(resource.content, resource.content_type)


def is_data_uri(src: str) -> bool:
    return src[: len(_DATA_SCHEME)].lower() == _DATA_SCHEME


def is_urlencoded_svg(src: str) -> bool:
    """Check for an SVG data URI whose payload is percent-encoded, not Base64."""
    header = src[len(_DATA_SCHEME) :].split(",", 1)[0]
    media_type, *params = header.split(";")
    if media_type.strip().lower() != _SVG_MEDIA_TYPE:
        return False
    return "base64" not in {param.strip().lower() for param in params}


def reencode_svg_data_uri(src: str) -> str:
    """Rewrite ``data:image/svg+xml,<percent-encoded>`` as a Base64 data URI."""
    _header, separator, payload = src[len(_DATA_SCHEME) :].partition(",")
    if not separator:
        raise SvgEncodingError("SVG data URI has no payload")
    try:
        svg_xml = unquote(payload, errors="strict")
        encoded = base64.b64encode(svg_xml.encode("utf-8")).decode("ascii")
    except (UnicodeDecodeError, UnicodeEncodeError) as exc:
        raise SvgEncodingError(f"Failed to encode SVG to Base64: {exc}") from exc
    return f"{_DATA_SCHEME}{_SVG_MEDIA_TYPE};base64,{encoded}"


def absolutize_url(src: str, base_url: str | None) -> str:
    """Resolve ``src`` against ``base_url``, upgrading http to https on secure pages."""
    if not base_url:
        return src
    absolute = urljoin(base_url, src)
    if urlsplit(base_url).scheme.lower() == "https" and urlsplit(absolute).scheme.lower() == "http":
        absolute = "https:" + absolute[len("http:") :]
    return absolute


def encode_data_uri(content: bytes, content_type: str | None) -> str:
    media_type = (content_type or "").split(";", 1)[0].strip() or _FALLBACK_MEDIA_TYPE
    encoded = base64.b64encode(content).decode("ascii")
    return f"{_DATA_SCHEME}{media_type};base64,{encoded}"
