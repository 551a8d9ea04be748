"""
Publisher pipelines.

Each pipeline is a plain function Document → NewsArticleContent. PIPELINES
is the only place a publisher is tied to its function; publishers without
an entry are known names that nobody has written a pipeline for yet.
"""

from typing import Callable

from ..document import Document
from ..exceptions import UnknownError
from ..schemas import NewsArticleContent, Publisher
from . import guardian, independent, mirror

Pipeline = Callable[[Document], NewsArticleContent]

PIPELINES: dict[Publisher, Pipeline] = {
    Publisher.GUARDIAN: guardian.parse,
    Publisher.INDEPENDENT: independent.parse,
    Publisher.MIRROR: mirror.parse,
}


def get_pipeline(publisher: Publisher) -> Pipeline:
    """The pipeline for publisher; raises UnknownError if there is none."""
    try:
        return PIPELINES[publisher]
    except KeyError:
        raise UnknownError(
            f"No parser implemented for publisher: {publisher.value}",
            {"publisher": publisher.value}
        ) from None
