"""Integration tests for page2md with real network calls.

These tests make actual HTTP requests and are marked with
@pytest.mark.integration so they are skipped by default.

Run integration tests only:
    pytest -m integration
"""

from __future__ import annotations

import asyncio

import pytest

from page2md import ConversionOptions, ImageOption, convert_html
from page2md.images import ImageResolver

_PAGE = """
<html>
  <head><title>Python</title></head>
  <body>
    <article>
      <p>The logo:</p>
      <img src="/static/img/python-logo.png" alt="Python logo">
      <img src="/static/img/this-does-not-exist.png" alt="missing">
      <p>Done.</p>
    </article>
  </body>
</html>
"""


class TestBase64Images:
    """Embedding real images fetched over the network."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_resolver_embeds_remote_png(self, network_timeout: float) -> None:
        """A real PNG comes back as a Base64 data URI."""
        resolver = ImageResolver(ConversionOptions(base_url="https://www.python.org/"))

        result = await asyncio.wait_for(
            resolver.resolve("/static/img/python-logo.png"), timeout=network_timeout
        )

        assert result.startswith("data:image/png;base64,")

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_page_with_broken_image(self, network_timeout: float) -> None:
        """The broken image is dropped; the rest converts."""
        options = ConversionOptions(
            image_option=ImageOption.BASE64,
            base_url="http://www.python.org/",
            prefetch_images=True,
        )

        result = await asyncio.wait_for(convert_html(_PAGE, options), timeout=network_timeout)

        assert result.startswith("# Python\n\nThe logo:\n\n![Python logo](data:image/png;base64,")
        assert "missing" not in result
        assert result.endswith("Done\\.")
