"""
Main orchestrator for the article parser.

Resolves the publisher up front, parses the markup once, hands the document
to that publisher's pipeline and wraps the result with page metadata.
Errors from the pipeline reach the caller unchanged.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .document import Document
from .exceptions import ArticleParseError
from .logger import get_module_logger, set_level
from .publishers import get_pipeline
from .schemas import PageMeta, ParsedPage, Publisher

logger = get_module_logger("main")


class ArticleParser:
    """
    Parser for one publisher's pages.

    The publisher is checked when the parser is built, so an unknown or
    unsupported publisher fails before any markup is touched.
    """

    def __init__(
        self,
        publisher: Union[Publisher, str],
        log_level: Optional[int] = None
    ):
        if log_level is not None:
            set_level(log_level)

        if not isinstance(publisher, Publisher):
            publisher = Publisher.from_name(publisher)
        self.publisher = publisher
        self._pipeline = get_pipeline(publisher)

        logger.debug(f"ArticleParser initialized for {publisher.value}")

    def parse(self, url: str, html: Union[str, bytes]) -> ParsedPage:
        """
        Parse one page.

        Args:
            url: Source url (recorded, never fetched)
            html: Raw markup, as text or undecoded bytes

        Returns:
            ParsedPage with page metadata and the extracted content

        Raises:
            ArticleParseError: any failure from the publisher pipeline
        """
        logger.info(f"Parsing {url} ({self.publisher.value})")

        document = Document.parse(html)
        date_parsed = datetime.now(timezone.utc)

        try:
            content = self._pipeline(document)
        except ArticleParseError as e:
            logger.warning(f"Failed to parse {url}: {type(e).__name__}: {e.message}")
            raise

        meta = PageMeta(publisher=self.publisher, url=url, date_parsed=date_parsed)
        logger.info(f"Complete: {url}")
        return ParsedPage(meta=meta, content=content)

    def parse_file(
        self,
        file_path: Union[str, Path],
        url: Optional[str] = None
    ) -> ParsedPage:
        """Parse a captured page from disk. The url defaults to the file's URI."""
        file_path = Path(file_path)
        # Read bytes so Document can honour the page's declared charset
        raw_bytes = file_path.read_bytes()
        return self.parse(url or file_path.resolve().as_uri(), raw_bytes)


def parse_article_html(
    publisher: Union[Publisher, str],
    url: str,
    html: Union[str, bytes]
) -> ParsedPage:
    """Convenience function to parse one page."""
    return ArticleParser(publisher).parse(url, html)


def parse_article_file(
    publisher: Union[Publisher, str],
    file_path: Union[str, Path],
    url: Optional[str] = None
) -> ParsedPage:
    """Convenience function to parse a captured page from disk."""
    return ArticleParser(publisher).parse_file(file_path, url=url)
