"""
Selection contract: uniqueness- and existence-checked queries.

Every pipeline goes through these helpers instead of calling
Pattern.select() directly, so a page whose shape has drifted fails with a
HtmlStructureError naming the selector rather than producing a half-filled
article.

Mandatory fields fail on every cause, NON_UNIQUE_ELEMENT included. Optional
fields go through optional(), which resolves any selection failure to None.
"""

import json
from typing import Any, Callable, NamedTuple, Optional, Sequence, TypeVar

from bs4 import NavigableString, Tag

from .document import Pattern, element_children
from .exceptions import (
    HtmlErrorCause, HtmlStructureError, JsonParseError, JsonParseErrorCause
)
from .logger import get_module_logger

logger = get_module_logger("selection")

T = TypeVar("T")


def select_unique(context: Tag, pattern: Pattern) -> Tag:
    """The single element matching pattern under context."""
    matches = pattern.select(context)
    if not matches:
        raise HtmlStructureError(HtmlErrorCause.MISSING_ELEMENT, pattern.css)
    if len(matches) > 1:
        raise HtmlStructureError(HtmlErrorCause.NON_UNIQUE_ELEMENT, pattern.css)
    return matches[0]


def select_first(context: Tag, pattern: Pattern) -> Tag:
    """The first element matching pattern under context; duplicates are fine."""
    matches = pattern.select(context)
    if not matches:
        raise HtmlStructureError(HtmlErrorCause.MISSING_ELEMENT, pattern.css)
    return matches[0]


def attr_or_none(element: Tag, name: str) -> Optional[str]:
    """Trimmed attribute value, or None when it is absent or blank."""
    value = element.get(name)
    if isinstance(value, list):
        # multi-valued attributes such as class come back as lists
        value = ' '.join(value)
    if value is None:
        return None
    value = value.strip()
    return value or None


def select_unique_attribute(context: Tag, pattern: Pattern, name: str) -> str:
    """Attribute of the single element matching pattern; blank counts as missing."""
    value = attr_or_none(select_unique(context, pattern), name)
    if value is None:
        raise HtmlStructureError(HtmlErrorCause.MISSING_ATTRIBUTE, pattern.css, attribute=name)
    return value


def optional(lookup: Callable[[], T]) -> Optional[T]:
    """Run a selection for an optional field; any HtmlStructureError becomes None."""
    try:
        return lookup()
    except HtmlStructureError as e:
        logger.debug(f"Optional lookup gave up ({e.cause.value}): {e.message}")
        return None


# --- Embedded JSON ---
# For pages that carry article data as JSON-LD or in data-* attributes.
# None of the current layouts need them yet.

def _load_json(raw: str, cause: JsonParseErrorCause) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise JsonParseError(cause, str(e)) from None


def select_unique_json(context: Tag, pattern: Pattern) -> Any:
    """Decode the body of the single element matching pattern (e.g. a JSON-LD script)."""
    element = select_unique(context, pattern)
    raw = ''.join(str(child) for child in element.contents if isinstance(child, NavigableString))
    return _load_json(raw, JsonParseErrorCause.INVALID_EMBEDDED_JSON)


def select_unique_attribute_json(context: Tag, pattern: Pattern, name: str) -> Any:
    """Decode JSON stored in an attribute (e.g. data-settings) of a unique element."""
    raw = select_unique_attribute(context, pattern, name)
    return _load_json(raw, JsonParseErrorCause.INVALID_DATA_ATTRIBUTE_JSON)


# --- Categories ---

def split_categories(values: Sequence[Optional[str]]) -> list[str]:
    """Comma-split each present value and concatenate the pieces in order."""
    categories = []
    for value in values:
        if not value:
            continue
        categories.extend(part.strip() for part in value.split(',') if part.strip())
    return categories


def meta_categories(context: Tag, patterns: Sequence[Pattern], name: str = "content") -> list[str]:
    """
    Categories from every meta tag matching each pattern, in pattern then
    document order. Missing or repeated tags never fail the parse.
    """
    return split_categories([
        attr_or_none(meta, name)
        for pattern in patterns
        for meta in pattern.select(context)
    ])


# --- Shape tables ---
# A shape is (pattern, kind, extractor). Children are classified by the first
# shape whose pattern matches them; extend the table to support a new layout.

PARAGRAPH = "paragraph"
IMAGE = "image"
VIDEO = "video"


class Shape(NamedTuple):
    pattern: Pattern
    kind: str
    extract: Callable[[Tag], Any]


def match_shape(element: Tag, shapes: Sequence[Shape]) -> Optional[Shape]:
    """First shape element matches, or None."""
    for shape in shapes:
        if shape.pattern.matches(element):
            return shape
    return None


def scan_children(container: Tag, shapes: Sequence[Shape]) -> dict[str, list]:
    """
    Walk container's direct children once and sort them by shape.

    Returns a dict of kind → extracted values in document order. Children
    matching no shape are skipped, as are those whose extractor returns None.
    """
    found = {shape.kind: [] for shape in shapes}
    for child in element_children(container):
        shape = match_shape(child, shapes)
        if shape is None:
            logger.debug(f"Skipping unrecognised <{child.name}> child")
            continue
        value = shape.extract(child)
        if value is not None:
            found[shape.kind].append(value)
    return found
