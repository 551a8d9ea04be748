"""
The Mirror.

Layout: body > main > article.article-main wraps everything. The content
column's first child decides the thumbnail (lead image figure or a video
player); div.article-body holds paragraphs, lists and in-article image
figures. Dates are RFC 3339.
"""

from dataclasses import dataclass

from bs4 import Tag

from ..document import Document, Pattern
from ..exceptions import UnknownError
from ..logger import get_module_logger
from ..schemas import Image, NewsArticleContent
from ..selection import (
    IMAGE, PARAGRAPH, Shape, attr_or_none, match_shape, meta_categories,
    optional, scan_children, select_first, select_unique, select_unique_attribute
)
from ..text import blocks_text, element_text, required_text
from ..timestamps import parse_rfc3339

logger = get_module_logger("mirror")


@dataclass(frozen=True)
class MirrorPatterns:
    article_root: Pattern
    article_content: Pattern
    article_body: Pattern
    content_children: Pattern
    headline: Pattern
    sub_title: Pattern
    img: Pattern
    caption: Pattern
    url_meta: Pattern
    mod_video: Pattern
    lead_image: Pattern
    in_article_image: Pattern
    body_block: Pattern
    section: Pattern
    date_updated: Pattern
    date_published: Pattern


def compile_patterns() -> MirrorPatterns:
    return MirrorPatterns(
        article_root=Pattern('body > main > article.article-main'),
        article_content=Pattern(':scope > div.article-wrapper > div.content-column'),
        article_body=Pattern(':scope > div.article-body'),
        content_children=Pattern(':scope > *'),
        headline=Pattern('h1'),
        sub_title=Pattern('p.sub-title'),
        img=Pattern('img'),
        caption=Pattern('figcaption > .caption'),
        url_meta=Pattern('meta[itemprop="url"]'),
        mod_video=Pattern('div.mod-video'),
        lead_image=Pattern('figure.lead-article-image'),
        in_article_image=Pattern('figure.in-article-image'),
        body_block=Pattern('p, ul'),
        section=Pattern('head > meta[property="article:section"]'),
        date_updated=Pattern('head > meta[property="article:modified_time"]'),
        date_published=Pattern('head > meta[property="article:published_time"]'),
    )


PATTERNS = compile_patterns()


def _lead_image(figure: Tag, patterns: MirrorPatterns) -> Image:
    caption = element_text(select_unique(figure, patterns.caption))
    img = select_unique(figure, patterns.img)
    return Image(alt=attr_or_none(img, "alt"), url=attr_or_none(img, "src"), caption=caption)


def _in_article_image(figure: Tag, patterns: MirrorPatterns) -> Image:
    # the <img> is a low-res placeholder; the real url sits in a meta tag
    img = select_first(figure, patterns.img)
    url = attr_or_none(select_unique(figure, patterns.url_meta), "content")
    captions = patterns.caption.select(figure)
    return Image(
        alt=attr_or_none(img, "alt"),
        url=url,
        caption=element_text(captions[0]) if captions else None,
    )


def _thumbnail_shapes(patterns: MirrorPatterns) -> tuple:
    return (
        # video-led pages: the player's JSON is not reliably escaped, so no data
        Shape(patterns.mod_video, IMAGE, lambda el: Image()),
        Shape(patterns.lead_image, IMAGE, lambda el: _lead_image(el, patterns)),
    )


def _body_shapes(patterns: MirrorPatterns) -> tuple:
    return (
        Shape(patterns.in_article_image, IMAGE, lambda el: _in_article_image(el, patterns)),
        Shape(patterns.body_block, PARAGRAPH, lambda el: el),
    )


def _thumbnail(article_content: Tag, patterns: MirrorPatterns) -> Image:
    first_child = select_first(article_content, patterns.content_children)
    shape = match_shape(first_child, _thumbnail_shapes(patterns))
    if shape is None:
        raise UnknownError("thumbnail type unknown", {"element": first_child.name})
    return shape.extract(first_child)


def parse(document: Document, patterns: MirrorPatterns = PATTERNS) -> NewsArticleContent:
    """Extract a news article from a Mirror page."""
    root = document.root
    article_root = select_unique(root, patterns.article_root)
    article_content = select_unique(article_root, patterns.article_content)
    article_body = select_unique(article_content, patterns.article_body)

    headline = required_text(
        element_text(select_unique(article_root, patterns.headline)), "headline"
    )
    sub_title = optional(lambda: select_unique(article_root, patterns.sub_title))
    description = element_text(sub_title) if sub_title is not None else ""
    thumbnail = _thumbnail(article_content, patterns)
    categories = meta_categories(root, [patterns.section])

    inline = scan_children(article_body, _body_shapes(patterns))
    logger.debug(f"Body: {len(inline[PARAGRAPH])} blocks, {len(inline[IMAGE])} images")

    date_updated = parse_rfc3339(select_unique_attribute(root, patterns.date_updated, "content"))
    date_published = parse_rfc3339(select_unique_attribute(root, patterns.date_published, "content"))

    return NewsArticleContent(
        headline=headline,
        twitter_headline=None,
        description=description,
        thumbnail=thumbnail,
        categories=categories,
        images=inline[IMAGE],
        videos=[],
        body=required_text(blocks_text(inline[PARAGRAPH]), "body"),
        date_updated=date_updated,
        date_published=date_published,
    )
