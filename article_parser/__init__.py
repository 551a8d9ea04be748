"""
Article Parser

Turns a publisher's raw HTML page into one canonical news article record.
- Document:   html5lib-parsed tree plus compiled CSS patterns
- Selection:  uniqueness-checked queries every pipeline is built on
- Publishers: one extraction function per news site
- ArticleParser: picks the pipeline and wraps the result with page metadata

Public API surface:
  Orchestrator : ArticleParser, parse_article_html, parse_article_file
  Data models  : ParsedPage, PageMeta, NewsArticleContent, VideoArticleContent,
                 Image, Video, Publisher
  Error types  : ArticleParseError and its subclasses
"""

from .main import ArticleParser, parse_article_html, parse_article_file
from .document import Document, Pattern

from .schemas import (
    ParsedPage, PageMeta, NewsArticleContent, VideoArticleContent,
    Image, Video, Publisher,
)

from .exceptions import (
    ArticleParseError, UnknownError, HtmlStructureError, HtmlErrorCause,
    JsonParseError, JsonParseErrorCause, InvalidDateTimeError, HtmlDecodeError,
)

__version__ = "0.1.0"
__all__ = [
    "ArticleParser",
    "parse_article_html",
    "parse_article_file",
    "Document",
    "Pattern",
    "ParsedPage",
    "PageMeta",
    "NewsArticleContent",
    "VideoArticleContent",
    "Image",
    "Video",
    "Publisher",
    "ArticleParseError",
    "UnknownError",
    "HtmlStructureError",
    "HtmlErrorCause",
    "JsonParseError",
    "JsonParseErrorCause",
    "InvalidDateTimeError",
    "HtmlDecodeError",
]
