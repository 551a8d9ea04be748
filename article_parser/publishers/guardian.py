"""
The Guardian.

Layout: a header inside div.content__main-column holds the headline,
standfirst and lead figure; div.content__article-body holds paragraphs,
lists, image/interactive figures and YouTube media atoms as direct children.
Dates are RFC 3339.
"""

from dataclasses import dataclass

from bs4 import Tag

from ..document import Document, Pattern
from ..exceptions import HtmlErrorCause, HtmlStructureError, UnknownError
from ..logger import get_module_logger
from ..schemas import Image, NewsArticleContent, Video
from ..selection import (
    IMAGE, PARAGRAPH, VIDEO, Shape, attr_or_none, meta_categories, optional,
    scan_children, select_unique, select_unique_attribute
)
from ..text import blocks_text, element_text, required_text
from ..timestamps import parse_rfc3339

logger = get_module_logger("guardian")

YOUTUBE_URL = "https://www.youtube.com/watch?v={}"


@dataclass(frozen=True)
class GuardianPatterns:
    video_precheck: Pattern
    twitter_title: Pattern
    date_updated: Pattern
    date_published: Pattern
    section: Pattern
    header: Pattern
    headline: Pattern
    description: Pattern
    figure_header: Pattern
    img: Pattern
    figcaption: Pattern
    article_content: Pattern
    element_image: Pattern
    element_interactive: Pattern
    video_figure: Pattern
    youtube_iframe: Pattern
    body_block: Pattern


def compile_patterns() -> GuardianPatterns:
    return GuardianPatterns(
        video_precheck=Pattern(
            'body > div > article[id="article"]'
            '[itemtype="http://schema.org/VideoObject"].content--media--video'
        ),
        twitter_title=Pattern('head > meta[name="twitter:text:title"]'),
        date_updated=Pattern('meta[property="article:modified_time"]'),
        date_published=Pattern('meta[property="article:published_time"]'),
        section=Pattern('meta[property="article:section"]'),
        header=Pattern('div.content__main-column > header'),
        headline=Pattern('h1.content__headline'),
        description=Pattern('div.content__standfirst'),
        figure_header=Pattern('figure.media-primary'),
        img=Pattern('img'),
        figcaption=Pattern('figcaption.caption'),
        article_content=Pattern('div.content__article-body'),
        element_image=Pattern('figure.element-image'),
        element_interactive=Pattern('figure.element-interactive'),
        video_figure=Pattern('figure.element[data-atom-type="media"]'),
        youtube_iframe=Pattern('div.youtube-media-atom__iframe'),
        body_block=Pattern('p, ul'),
    )


PATTERNS = compile_patterns()


def _headline(header: Tag, patterns: GuardianPatterns) -> str:
    """
    Some pages repeat the <h1> (e.g. a sticky header copy). That is fine as
    long as every copy says the same thing.
    """
    headlines = [element_text(h1) for h1 in patterns.headline.select(header)]
    if not headlines:
        raise HtmlStructureError(HtmlErrorCause.MISSING_ELEMENT, patterns.headline.css)
    if any(h != headlines[0] for h in headlines[1:]):
        raise UnknownError(
            "Unknown headline type - too many <h1>s with differing text",
            {"headlines": headlines}
        )
    return headlines[0]


def _captioned_image(figure: Tag, patterns: GuardianPatterns) -> Image:
    img = select_unique(figure, patterns.img)
    return Image(
        alt=attr_or_none(img, "alt"),
        url=attr_or_none(img, "src"),
        caption=element_text(select_unique(figure, patterns.figcaption)),
    )


def _video(figure: Tag, patterns: GuardianPatterns) -> Video:
    caption = element_text(select_unique(figure, patterns.figcaption))
    youtube_id = select_unique_attribute(figure, patterns.youtube_iframe, "data-asset-id")
    return Video(url=YOUTUBE_URL.format(youtube_id), caption=caption)


def _body_shapes(patterns: GuardianPatterns) -> tuple:
    return (
        Shape(patterns.element_image, IMAGE, lambda el: _captioned_image(el, patterns)),
        # interactive embeds keep their slot in the image list but carry nothing
        Shape(patterns.element_interactive, IMAGE, lambda el: Image()),
        Shape(patterns.video_figure, VIDEO, lambda el: _video(el, patterns)),
        Shape(patterns.body_block, PARAGRAPH, lambda el: el),
    )


def parse(document: Document, patterns: GuardianPatterns = PATTERNS) -> NewsArticleContent:
    """Extract a news article from a Guardian page."""
    root = document.root

    if patterns.video_precheck.select(root):
        raise UnknownError("Article type: video article, not yet supported")

    header = select_unique(root, patterns.header)
    article_content = select_unique(root, patterns.article_content)

    headline = required_text(_headline(header, patterns), "headline")
    twitter_headline = optional(
        lambda: select_unique_attribute(root, patterns.twitter_title, "content")
    )
    description = required_text(
        element_text(select_unique(header, patterns.description)), "description"
    )
    thumbnail = _captioned_image(select_unique(header, patterns.figure_header), patterns)
    categories = meta_categories(root, [patterns.section])

    inline = scan_children(article_content, _body_shapes(patterns))
    logger.debug(
        f"Body: {len(inline[PARAGRAPH])} blocks, {len(inline[IMAGE])} images, "
        f"{len(inline[VIDEO])} videos"
    )

    date_updated = parse_rfc3339(select_unique_attribute(root, patterns.date_updated, "content"))
    date_published = parse_rfc3339(select_unique_attribute(root, patterns.date_published, "content"))

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
