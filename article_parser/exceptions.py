"""
Error taxonomy for the article parser.

Every failure inside the parse boundary is one of the classes below. A
pipeline either returns a complete article or raises exactly one of them;
nothing in between is ever handed back to the caller.

  - UnknownError          → unsupported document shape or publisher
  - HtmlStructureError    → a selector found nothing, too much, or no attribute
  - JsonParseError        → embedded JSON metadata would not decode
  - InvalidDateTimeError  → a timestamp did not match the publisher's format
  - HtmlDecodeError       → entity decoding of extracted text failed
"""

from enum import Enum
from typing import Optional


class ArticleParseError(Exception):
    """Base exception for all article parser errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to a JSON-friendly error record."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details
        }


class UnknownError(ArticleParseError):
    """
    Raised for document shapes (or publishers) the parser does not support.

    Examples: a video-only page handed to a news-article pipeline, several
    headlines with differing text, a thumbnail layout nobody has seen before.
    """
    pass


# --- Selector failures ---

class HtmlErrorCause(Enum):
    """Why a selection failed."""
    MISSING_ELEMENT = "missing_element"
    NON_UNIQUE_ELEMENT = "non_unique_element"
    MISSING_ATTRIBUTE = "missing_attribute"


class HtmlStructureError(ArticleParseError):
    """Raised when the markup does not have the shape a selector expects."""

    def __init__(
        self,
        cause: HtmlErrorCause,
        selector: str,
        attribute: Optional[str] = None
    ):
        if cause is HtmlErrorCause.MISSING_ATTRIBUTE:
            message = f"Missing attribute '{attribute}' on '{selector}'"
        elif cause is HtmlErrorCause.NON_UNIQUE_ELEMENT:
            message = f"More than one element matches '{selector}'"
        else:
            message = f"No element matches '{selector}'"
        super().__init__(message, {
            "cause": cause.value,
            "selector": selector,
            "attribute": attribute
        })
        self.cause = cause
        self.selector = selector
        self.attribute = attribute


# --- Embedded JSON failures ---

class JsonParseErrorCause(Enum):
    """Where the undecodable JSON came from."""
    INVALID_EMBEDDED_JSON = "invalid_embedded_json"
    INVALID_DATA_ATTRIBUTE_JSON = "invalid_data_attribute_json"


class JsonParseError(ArticleParseError):
    """Raised when JSON embedded in the page cannot be decoded."""

    def __init__(self, cause: JsonParseErrorCause, diagnostic: str):
        super().__init__(f"Invalid JSON ({cause.value}): {diagnostic}", {
            "cause": cause.value,
            "diagnostic": diagnostic
        })
        self.cause = cause
        self.diagnostic = diagnostic


# --- Text and timestamp failures ---

class InvalidDateTimeError(ArticleParseError):
    """Raised when a timestamp does not match the publisher's date format."""

    def __init__(self, diagnostic: str, value: Optional[str] = None):
        super().__init__(f"Invalid datetime: {diagnostic}", {
            "diagnostic": diagnostic,
            "value": value
        })
        self.diagnostic = diagnostic
        self.value = value


class HtmlDecodeError(ArticleParseError):
    """Raised when HTML entities in extracted text cannot be decoded."""

    def __init__(self, diagnostic: str, text: Optional[str] = None):
        super().__init__(f"HTML decode failed: {diagnostic}", {
            "diagnostic": diagnostic,
            "text": text
        })
        self.diagnostic = diagnostic
        self.text = text
