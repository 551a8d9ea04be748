"""
Tests for the document abstraction and the selection contract.

Covers uniqueness/existence checks, direct-child vs descendant scoping,
optional lookups, embedded JSON, categories and the shape-table scan.
"""

import pytest

from article_parser.document import Document, Pattern, element_children
from article_parser.exceptions import (
    HtmlErrorCause, HtmlStructureError, JsonParseError, JsonParseErrorCause
)
from article_parser.selection import (
    IMAGE, PARAGRAPH, Shape, attr_or_none, match_shape, meta_categories,
    optional, scan_children, select_first, select_unique,
    select_unique_attribute, select_unique_attribute_json, select_unique_json,
    split_categories
)

HTML = """
<html><head>
  <meta name="section" content="Politics, UK">
  <meta name="blank" content="   ">
  <script type="application/ld+json">{"@type": "NewsArticle", "headline": "Hi"}</script>
  <script type="text/broken">{"@type": </script>
</head><body>
  <div id="one" class="box">
    <p class="lead">Lead</p>
    <section><p class="nested">Nested</p></section>
  </div>
  <div class="box" data-settings='{"autoplay": false}' data-bad='{nope}'></div>
</body></html>
"""


@pytest.fixture
def document():
    return Document.parse(HTML)


def test_select_unique_returns_single_match(document):
    element = select_unique(document.root, Pattern("p.lead"))
    assert element.get_text() == "Lead"


def test_select_unique_missing(document):
    with pytest.raises(HtmlStructureError) as exc:
        select_unique(document.root, Pattern("p.absent"))
    assert exc.value.cause is HtmlErrorCause.MISSING_ELEMENT
    assert exc.value.selector == "p.absent"


def test_select_unique_non_unique(document):
    with pytest.raises(HtmlStructureError) as exc:
        select_unique(document.root, Pattern("div.box"))
    assert exc.value.cause is HtmlErrorCause.NON_UNIQUE_ELEMENT


def test_select_first_tolerates_duplicates(document):
    assert select_first(document.root, Pattern("div.box")).get("id") == "one"


def test_select_first_missing(document):
    with pytest.raises(HtmlStructureError) as exc:
        select_first(document.root, Pattern("table"))
    assert exc.value.cause is HtmlErrorCause.MISSING_ELEMENT


def test_scope_direct_children_only(document):
    """':scope >' must not descend into nested structures."""
    box = select_unique(document.root, Pattern("#one"))
    direct = Pattern(":scope > p")
    anywhere = Pattern("p")

    assert [p.get_text() for p in direct.select(box)] == ["Lead"]
    assert [p.get_text() for p in anywhere.select(box)] == ["Lead", "Nested"]
    assert [el.name for el in element_children(box)] == ["p", "section"]


def test_select_unique_attribute(document):
    value = select_unique_attribute(document.root, Pattern('meta[name="section"]'), "content")
    assert value == "Politics, UK"


def test_blank_attribute_is_missing(document):
    with pytest.raises(HtmlStructureError) as exc:
        select_unique_attribute(document.root, Pattern('meta[name="blank"]'), "content")
    assert exc.value.cause is HtmlErrorCause.MISSING_ATTRIBUTE
    assert exc.value.attribute == "content"


def test_attr_or_none_trims(document):
    box = select_unique(document.root, Pattern("#one"))
    assert attr_or_none(box, "id") == "one"
    assert attr_or_none(box, "class") == "box"
    assert attr_or_none(box, "title") is None


def test_optional_resolves_any_selection_failure(document):
    root = document.root
    assert optional(lambda: select_unique(root, Pattern("p.absent"))) is None
    assert optional(
        lambda: select_unique_attribute(root, Pattern('meta[name="blank"]'), "content")
    ) is None
    assert optional(lambda: select_unique(root, Pattern("div.box"))) is None
    assert optional(lambda: select_unique(root, Pattern("p.lead"))).get_text() == "Lead"


def test_select_unique_json(document):
    data = select_unique_json(document.root, Pattern('script[type="application/ld+json"]'))
    assert data == {"@type": "NewsArticle", "headline": "Hi"}


def test_select_unique_json_invalid(document):
    with pytest.raises(JsonParseError) as exc:
        select_unique_json(document.root, Pattern('script[type="text/broken"]'))
    assert exc.value.cause is JsonParseErrorCause.INVALID_EMBEDDED_JSON


def test_select_unique_attribute_json(document):
    pattern = Pattern("div[data-settings]")
    assert select_unique_attribute_json(document.root, pattern, "data-settings") == {"autoplay": False}

    with pytest.raises(JsonParseError) as exc:
        select_unique_attribute_json(document.root, pattern, "data-bad")
    assert exc.value.cause is JsonParseErrorCause.INVALID_DATA_ATTRIBUTE_JSON


def test_categories():
    assert split_categories(["News", None, "World, Europe", ""]) == ["News", "World", "Europe"]
    assert split_categories([None, None]) == []


def test_meta_categories(document):
    patterns = [Pattern('meta[name="section"]'), Pattern('meta[name="missing"]')]
    assert meta_categories(document.root, patterns) == ["Politics", "UK"]


def test_meta_categories_repeated_tags():
    document = Document.parse(
        '<html><head><meta name="section" content="News">'
        '<meta name="section" content="Extra, More"><meta name="section" content=" ">'
        '<meta name="sub" content="World"></head><body></body></html>'
    )
    patterns = [Pattern('meta[name="section"]'), Pattern('meta[name="sub"]')]
    assert meta_categories(document.root, patterns) == ["News", "Extra", "More", "World"]


def test_scan_children_classifies_in_order():
    document = Document.parse(
        "<div id='c'><p>a</p><figure class='img'></figure><span>skip</span>"
        "<figure class='drop'></figure><p>b</p></div>"
    )
    container = select_unique(document.root, Pattern("#c"))
    shapes = (
        Shape(Pattern("figure.img"), IMAGE, lambda el: "image"),
        Shape(Pattern("figure.drop"), IMAGE, lambda el: None),
        Shape(Pattern("p"), PARAGRAPH, lambda el: el.get_text()),
    )

    found = scan_children(container, shapes)

    assert found == {IMAGE: ["image"], PARAGRAPH: ["a", "b"]}


def test_match_shape_priority():
    document = Document.parse("<figure class='a b'></figure>")
    figure = select_unique(document.root, Pattern("figure"))
    shapes = (
        Shape(Pattern("figure.b"), "first", lambda el: 1),
        Shape(Pattern("figure.a"), "second", lambda el: 2),
    )
    assert match_shape(figure, shapes).kind == "first"
    assert match_shape(figure, shapes[:0]) is None


def test_parse_bytes_uses_declared_charset():
    raw = '<html><head><meta charset="iso-8859-1"></head><body><p>caf\xe9</p></body></html>'
    document = Document.parse(raw.encode("latin-1"))
    assert select_unique(document.root, Pattern("p")).get_text() == "caf\xe9"


def test_detect_charset_defaults_to_utf8():
    assert Document.detect_charset_from_bytes(b"<html><body>hi</body></html>") == "utf-8"
    assert Document.detect_charset_from_bytes(
        b'<meta http-equiv="Content-Type" content="text/html; charset=ISO-8859-1">'
    ) == "windows-1252"
