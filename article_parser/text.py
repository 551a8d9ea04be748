"""
Text normalization for extracted markup.

Single-line text: every descendant text node trimmed, joined by one space,
whitespace runs collapsed, result trimmed. Multi-block text (article bodies)
normalizes each block on its own and joins them with newlines.

Both are idempotent: normalizing normalized text returns it unchanged.
"""

import re
from html.entities import html5 as HTML5_ENTITIES
from typing import Iterable

from bs4 import Tag

from .exceptions import HtmlDecodeError, UnknownError

WHITESPACE_PATTERN = re.compile(r'\s+')

# "&name;", "&#123;" or "&#x1F;" - the forms decode_html understands
ENTITY_PATTERN = re.compile(r'&(#[xX][0-9a-fA-F]+|#[0-9]+|[A-Za-z][A-Za-z0-9]*);')


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_PATTERN.sub(' ', text)


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return collapse_whitespace(text).strip()


def element_text(element: Tag) -> str:
    """Normalized single-line text of an element and all its descendants."""
    return normalize_text(' '.join(s.strip() for s in element.strings))


def join_with_newline(blocks: Iterable[str]) -> str:
    return '\n'.join(blocks).strip()


def blocks_text(elements: Iterable[Tag]) -> str:
    """Normalize each element separately, one block per line."""
    return join_with_newline(element_text(el) for el in elements)


def _decode_entity(match: re.Match) -> str:
    ref = match.group(1)
    if ref.startswith('#'):
        try:
            codepoint = int(ref[2:], 16) if ref[1] in 'xX' else int(ref[1:])
            return chr(codepoint)
        except (ValueError, OverflowError):
            raise HtmlDecodeError(f"malformed numeric entity '&{ref};'", match.string) from None

    decoded = HTML5_ENTITIES.get(ref + ';')
    if decoded is None:
        raise HtmlDecodeError(f"unknown entity '&{ref};'", match.string)
    return decoded


def decode_html(text: str) -> str:
    """
    Decode HTML entities left in already-extracted text.

    Some pages double-escape their copy ("&amp;amp;"), so the parser's own
    decoding leaves entities behind. Unknown names and out-of-range numeric
    references raise HtmlDecodeError; a bare '&' is left alone.
    """
    return ENTITY_PATTERN.sub(_decode_entity, text)


def required_text(text: str, field: str) -> str:
    """Return text unchanged, or fail if normalization left nothing behind."""
    if not text:
        raise UnknownError(f"Empty {field} after normalization", {"field": field})
    return text
