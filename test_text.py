"""Tests for text normalization, entity decoding and timestamp parsing."""

from datetime import datetime, timezone

import pytest

from article_parser.document import Document, Pattern
from article_parser.exceptions import HtmlDecodeError, InvalidDateTimeError, UnknownError
from article_parser.selection import select_unique
from article_parser.text import (
    blocks_text, decode_html, element_text, normalize_text, required_text
)
from article_parser.timestamps import parse_rfc3339, parse_with_format


def _element(html: str, css: str):
    return select_unique(Document.parse(html).root, Pattern(css))


# --- Normalization ---

def test_element_text_joins_and_collapses():
    p = _element("<p>  Hello\n\t<b>big</b>   <i> wide </i>world  </p>", "p")
    assert element_text(p) == "Hello big wide world"


def test_element_text_separates_adjacent_nodes():
    """Text nodes are joined with a space even when the markup has none."""
    p = _element("<p>one<span>two</span></p>", "p")
    assert element_text(p) == "one two"


def test_element_text_empty():
    assert element_text(_element("<div>  <span> </span> </div>", "div")) == ""


@pytest.mark.parametrize("text", [
    "  spaced   out\ttext \n",
    "already normal",
    " non breaking ",
    "",
])
def test_normalize_is_idempotent(text):
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_blocks_text_one_line_per_block():
    document = Document.parse("<div><p> First  one </p><ul><li>a</li><li>b</li></ul><p>Last</p></div>")
    blocks = Pattern(":scope > p, :scope > ul").select(select_unique(document.root, Pattern("div")))
    assert blocks_text(blocks) == "First one\na b\nLast"


def test_blocks_text_no_blocks():
    assert blocks_text([]) == ""


def test_required_text():
    assert required_text("x", "headline") == "x"
    with pytest.raises(UnknownError):
        required_text("", "headline")


# --- Entity decoding ---

def test_decode_html():
    assert decode_html("Fish &amp; chips &#39;n&#x27; peas") == "Fish & chips 'n' peas"


def test_decode_html_leaves_bare_ampersand():
    assert decode_html("Tom & Jerry") == "Tom & Jerry"


def test_decode_html_unknown_entity():
    with pytest.raises(HtmlDecodeError) as exc:
        decode_html("bad &bogus; entity")
    assert "bogus" in exc.value.diagnostic


def test_decode_html_out_of_range_reference():
    with pytest.raises(HtmlDecodeError):
        decode_html("&#99999999;")


# --- Timestamps ---

def test_parse_rfc3339_utc():
    assert parse_rfc3339("2020-05-01T12:30:00Z") == datetime(2020, 5, 1, 12, 30, tzinfo=timezone.utc)


def test_parse_rfc3339_offset_and_fraction():
    parsed = parse_rfc3339("2021-03-04T09:15:30.1234567+01:00")
    assert parsed == datetime(2021, 3, 4, 8, 15, 30, 123456, tzinfo=timezone.utc)
    assert parsed.tzinfo is timezone.utc


@pytest.mark.parametrize("value", [
    "2020-05-01",
    "2020-05-01T12:30:00",
    "2020-05-01T12:30:00+0100",
    "2020-05-01T12:30:00+05:75",
    "2020-05-01T12:30:00-24:00",
    "2020-13-01T12:30:00Z",
    "yesterday",
])
def test_parse_rfc3339_rejects(value):
    with pytest.raises(InvalidDateTimeError) as exc:
        parse_rfc3339(value)
    assert exc.value.value == value


def test_parse_with_format():
    parsed = parse_with_format("2019-11-20T14:00:00+0100")
    assert parsed == datetime(2019, 11, 20, 13, 0, tzinfo=timezone.utc)


def test_parse_with_format_requires_offset():
    with pytest.raises(InvalidDateTimeError):
        parse_with_format("2019-11-20 14:00:00", "%Y-%m-%d %H:%M:%S")
    with pytest.raises(InvalidDateTimeError):
        parse_with_format("20/11/2019")


@pytest.mark.parametrize("value", [
    "2019-11-20T14:00:00Z",
    "2019-11-20T14:00:00+01:00",
])
def test_parse_with_format_requires_hhmm_offset(value):
    with pytest.raises(InvalidDateTimeError) as exc:
        parse_with_format(value)
    assert exc.value.value == value
