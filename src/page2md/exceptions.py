"""Custom exceptions for page2md."""


class Page2mdError(Exception):
    """Base exception for page2md operations."""


class FetchError(Page2mdError):
    """Error during content fetching."""


class ImageResolutionError(Page2mdError):
    """An image source could not be turned into a Markdown reference."""


class SvgEncodingError(ImageResolutionError):
    """A URL-encoded SVG data URI could not be re-encoded as Base64."""


class ContentExtractionError(Page2mdError):
    """No renderable content could be found in the document."""


class ConversionError(Page2mdError):
    """The document tree handed to the converter is unusable."""
