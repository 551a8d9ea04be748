"""
Document abstraction: a parsed markup tree plus compiled query patterns.

A Pattern is compiled once and then evaluated against a context node, which
is either the whole document or a subtree root. Selectors written with
":scope > ..." only look at the direct children of that context; plain
selectors search every descendant.
"""

import re
from typing import Optional, Union

import soupsieve as sv
from bs4 import BeautifulSoup, Tag

from .logger import get_module_logger

logger = get_module_logger("document")


class Pattern:
    """A CSS selector compiled once and evaluated against any context node."""

    __slots__ = ("css", "_compiled")

    def __init__(self, css: str):
        self.css = css
        self._compiled = sv.compile(css)

    def select(self, context: Tag) -> list[Tag]:
        """All matches under context, in document order."""
        return self._compiled.select(context)

    def matches(self, element: Tag) -> bool:
        """Whether element itself has this shape."""
        return self._compiled.match(element)

    def __str__(self) -> str:
        return self.css

    def __repr__(self) -> str:
        return f"Pattern({self.css!r})"


def element_children(element: Tag) -> list[Tag]:
    """Direct child elements of element, skipping text and comments."""
    return [child for child in element.children if isinstance(child, Tag)]


class Document:
    """A parsed HTML page."""

    # WHATWG label remapping: browsers decode these as the mapped charset
    WHATWG_CHARSET_MAP = {
        'iso-8859-1': 'windows-1252',
        'iso8859-1': 'windows-1252',
        'latin-1': 'windows-1252',
        'latin1': 'windows-1252',
        'us-ascii': 'windows-1252',
        'ascii': 'windows-1252',
        'iso-8859-9': 'windows-1254',
        'iso-8859-11': 'windows-874',
    }

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    @property
    def root(self) -> BeautifulSoup:
        """Context node covering the whole document."""
        return self.soup

    @staticmethod
    def detect_charset_from_bytes(raw_bytes: bytes) -> str:
        """
        Find the charset declared by <meta charset> or <meta http-equiv> in
        the first 2KB of the page. Defaults to 'utf-8'.
        """
        head_str = raw_bytes[:2048].decode('ascii', errors='ignore')

        m = re.search(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', head_str, re.IGNORECASE)
        if not m:
            m = re.search(
                r'<meta[^>]+content=["\'][^"\']*charset=([^\s"\';>]+)',
                head_str, re.IGNORECASE
            )
        if not m:
            return 'utf-8'

        charset = m.group(1).strip().lower()
        return Document.WHATWG_CHARSET_MAP.get(charset, charset)

    @classmethod
    def decode(cls, raw_bytes: bytes, declared_charset: Optional[str] = None) -> str:
        """Decode raw page bytes with the declared (or detected) charset."""
        charset = declared_charset or cls.detect_charset_from_bytes(raw_bytes)
        try:
            return raw_bytes.decode(charset, errors='replace')
        except LookupError:
            logger.warning(f"Unknown charset '{charset}', decoding as utf-8")
            return raw_bytes.decode('utf-8', errors='replace')

    @classmethod
    def parse(cls, markup: Union[str, bytes],
              declared_charset: Optional[str] = None) -> "Document":
        """
        Parse raw markup into a Document.

        html5lib builds the same tree a browser would, which is what the
        publisher selectors are written against. lxml is only used if
        html5lib itself blows up.
        """
        if isinstance(markup, bytes):
            markup = cls.decode(markup, declared_charset)

        try:
            soup = BeautifulSoup(markup, 'html5lib')
        except Exception as e:
            logger.warning(f"html5lib parsing failed, trying lxml: {e}")
            soup = BeautifulSoup(markup, 'lxml')

        return cls(soup)
