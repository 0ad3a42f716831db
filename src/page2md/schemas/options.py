"""Conversion options model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ImageOption(str, Enum):
    """How image sources are written into the Markdown output."""

    BASE64 = "base64"
    HTTP = "http"


class ConversionOptions(BaseModel):
    """Options for a single conversion call.

    Attributes
    ----------
    image_option : ImageOption
        ``base64`` embeds every image as a data URI (one GET per image),
        ``http`` links to the absolute image URL.
    include_links : bool
        Keep anchors as Markdown links. When False only the link text is kept.
    base_url : str | None
        URL of the document, used to resolve relative image sources.
    prefetch_images : bool
        Resolve all images of the document concurrently before serializing.
        The output is identical to the sequential mode.

    """

    model_config = ConfigDict(frozen=True)

    image_option: ImageOption = Field(default=ImageOption.BASE64, description="Image embedding mode")
    include_links: bool = Field(default=True, description="Render anchors as Markdown links")
    base_url: str | None = Field(default=None, description="Document URL for relative image sources")
    prefetch_images: bool = Field(default=False, description="Resolve images concurrently up front")

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str | None) -> str | None:
        """Treat a blank ``base_url`` as missing."""
        if v is None or not v.strip():
            return None
        return v.strip()
