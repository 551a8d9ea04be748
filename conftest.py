"""Shared fixtures: captured (synthetic) publisher pages under test_articles/."""

from pathlib import Path

import pytest

from article_parser.document import Document

TEST_ARTICLES_DIR = Path(__file__).parent / "test_articles"


@pytest.fixture
def read_html():
    """Return a loader for test_articles/<publisher>/<file_name> as text."""
    def _read(publisher: str, file_name: str) -> str:
        return (TEST_ARTICLES_DIR / publisher / file_name).read_text(encoding="utf-8")
    return _read


@pytest.fixture
def read_html_doc(read_html):
    """Return a loader that parses a test article into a Document."""
    def _read(publisher: str, file_name: str) -> Document:
        return Document.parse(read_html(publisher, file_name))
    return _read
