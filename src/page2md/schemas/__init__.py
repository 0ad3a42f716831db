"""Shared schemas for page2md."""

from page2md.schemas.options import ConversionOptions, ImageOption

__all__ = ["ConversionOptions", "ImageOption"]
