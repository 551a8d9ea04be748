"""
The Independent (AMP pages).

Layout: .headline / .sub-headline anywhere on the page, an optional
.hero-image holding an <amp-img>, and div.main-content > div.body-content
whose direct children are paragraphs and figures. Section metadata comes as
name= meta tags. Dates use a +HHMM offset rather than RFC 3339.
"""

from dataclasses import dataclass
from typing import Optional

from bs4 import Tag

from ..document import Document, Pattern
from ..logger import get_module_logger
from ..schemas import Image, NewsArticleContent, Video
from ..selection import (
    IMAGE, PARAGRAPH, VIDEO, Shape, attr_or_none, meta_categories, optional,
    scan_children, select_unique, select_unique_attribute
)
from ..text import blocks_text, decode_html, element_text, required_text
from ..timestamps import parse_with_format

logger = get_module_logger("independent")

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


@dataclass(frozen=True)
class IndependentPatterns:
    headline: Pattern
    twitter_title: Pattern
    description: Pattern
    hero_image: Pattern
    image_wrapper_child: Pattern
    og_image: Pattern
    section: Pattern
    subsection: Pattern
    story_body: Pattern
    body_image: Pattern
    amp_img: Pattern
    figcaption: Pattern
    figcaption_caption: Pattern
    figure_video: Pattern
    paragraph: Pattern
    date_updated: Pattern
    date_published: Pattern


def compile_patterns() -> IndependentPatterns:
    return IndependentPatterns(
        headline=Pattern('.headline'),
        twitter_title=Pattern('meta[name="twitter:title"]'),
        description=Pattern('.sub-headline'),
        hero_image=Pattern('.hero-image'),
        image_wrapper_child=Pattern(':scope > .image-wrapper'),
        og_image=Pattern('meta[property="og:image"]'),
        section=Pattern('meta[name="article:section"]'),
        subsection=Pattern('meta[name="article:subsection"]'),
        story_body=Pattern('div.main-content > div.body-content'),
        body_image=Pattern('figure:not(.i-gallery):not(.video)'),
        amp_img=Pattern('amp-img'),
        figcaption=Pattern('figcaption'),
        figcaption_caption=Pattern('figcaption.caption'),
        figure_video=Pattern('figure.video'),
        paragraph=Pattern('p'),
        date_updated=Pattern('meta[property="article:modified_time"]'),
        date_published=Pattern('meta[property="article:published_time"]'),
    )


PATTERNS = compile_patterns()


def _thumbnail(root: Tag, patterns: IndependentPatterns) -> Image:
    heroes = patterns.hero_image.select(root)
    if heroes:
        hero = heroes[0]
        wrappers = patterns.image_wrapper_child.select(hero)
        container = wrappers[0] if wrappers else hero
        amp_img = select_unique(container, patterns.amp_img)
        return Image(
            alt=attr_or_none(amp_img, "alt"),
            url=attr_or_none(amp_img, "src"),
            caption=attr_or_none(amp_img, "title"),
        )

    # no hero: fall back to the social share image
    url = optional(lambda: select_unique_attribute(root, patterns.og_image, "content"))
    return Image(url=url)


def _body_image(figure: Tag, patterns: IndependentPatterns) -> Optional[Image]:
    # galleries and other multi-image figures are not inline images
    imgs = patterns.amp_img.select(figure)
    if len(imgs) != 1:
        return None
    captions = patterns.figcaption.select(figure)
    return Image(
        url=attr_or_none(imgs[0], "src"),
        caption=element_text(captions[0]) if captions else None,
    )


def _video(figure: Tag, patterns: IndependentPatterns) -> Video:
    return Video(caption=element_text(select_unique(figure, patterns.figcaption_caption)))


def _body_shapes(patterns: IndependentPatterns) -> tuple:
    return (
        Shape(patterns.figure_video, VIDEO, lambda el: _video(el, patterns)),
        Shape(patterns.body_image, IMAGE, lambda el: _body_image(el, patterns)),
        Shape(patterns.paragraph, PARAGRAPH, lambda el: el),
    )


def parse(document: Document, patterns: IndependentPatterns = PATTERNS) -> NewsArticleContent:
    """Extract a news article from an Independent page."""
    root = document.root
    story_body = select_unique(root, patterns.story_body)

    headline = required_text(element_text(select_unique(root, patterns.headline)), "headline")
    twitter_headline = optional(
        lambda: select_unique_attribute(root, patterns.twitter_title, "content")
    )
    sub_headline = optional(lambda: select_unique(root, patterns.description))
    description = decode_html(element_text(sub_headline)) if sub_headline is not None else ""
    thumbnail = _thumbnail(root, patterns)
    categories = meta_categories(root, [patterns.section, patterns.subsection])

    inline = scan_children(story_body, _body_shapes(patterns))
    logger.debug(
        f"Body: {len(inline[PARAGRAPH])} paragraphs, {len(inline[IMAGE])} images, "
        f"{len(inline[VIDEO])} videos"
    )

    date_updated = parse_with_format(
        select_unique_attribute(root, patterns.date_updated, "content"), DATE_FORMAT
    )
    date_published = parse_with_format(
        select_unique_attribute(root, patterns.date_published, "content"), DATE_FORMAT
    )

    return NewsArticleContent(
        headline=headline,
        twitter_headline=twitter_headline,
        description=description,
        thumbnail=thumbnail,
        categories=categories,
        images=inline[IMAGE],
        videos=inline[VIDEO],
        body=required_text(blocks_text(inline[PARAGRAPH]), "body"),
        date_updated=date_updated,
        date_published=date_published,
    )
