"""
Pydantic schemas for the canonical article record.

Data flow:
  raw markup → Document → publisher pipeline → NewsArticleContent
  NewsArticleContent + PageMeta → ParsedPage (returned by ArticleParser)

All models are frozen: a pipeline builds each value once and nothing
mutates it afterwards. Equality is structural.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import UnknownError


class Publisher(str, Enum):
    """Closed set of publishers the parser knows about."""
    BBC = "bbc"
    DAILY_MAIL = "dailymail"
    INDEPENDENT = "independent"
    METRO = "metro"
    MIRROR = "mirror"
    SKY = "sky"
    SUN = "sun"
    GUARDIAN = "guardian"

    @classmethod
    def from_name(cls, name: str) -> "Publisher":
        """Look up a publisher by name; unknown names are an error, never a default."""
        key = name.strip().lower()
        if key == "theguardian":
            key = "guardian"
        try:
            return cls(key)
        except ValueError:
            raise UnknownError(
                f"Invalid publisher type: {name!r}",
                {"publisher": name}
            ) from None


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")
    return value.astimezone(timezone.utc)


# --- Media ---
# Each field is optional on its own: publishers expose different subsets.

class Image(_Frozen):
    """An image (thumbnail or inline figure)."""
    alt: Optional[str] = None
    url: Optional[str] = None
    caption: Optional[str] = None


class Video(_Frozen):
    """An inline video."""
    alt: Optional[str] = None
    url: Optional[str] = None
    caption: Optional[str] = None


# --- Content variants ---

class NewsArticleContent(_Frozen):
    """Everything extracted from a news article page."""
    kind: Literal["NewsArticle"] = "NewsArticle"
    headline: str
    twitter_headline: Optional[str] = None
    description: str
    thumbnail: Image
    categories: list[str] = Field(default_factory=list)  # in page order, not deduplicated
    images: list[Image] = Field(default_factory=list)
    videos: list[Video] = Field(default_factory=list)
    body: str = Field(description="Paragraph and list blocks joined by newlines")
    date_updated: datetime
    date_published: datetime

    @field_validator("date_updated", "date_published")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return _to_utc(value)


class VideoArticleContent(_Frozen):
    """Reserved for video-led pages. No pipeline produces this yet."""
    kind: Literal["VideoArticle"] = "VideoArticle"
    headline: str
    video: Video = Field(default_factory=Video)


ParsedContent = Annotated[
    Union[NewsArticleContent, VideoArticleContent],
    Field(discriminator="kind")
]


# --- Page envelope ---

class PageMeta(_Frozen):
    """Where the page came from and when it was parsed."""
    publisher: Publisher
    url: str
    date_parsed: datetime

    @field_validator("date_parsed")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return _to_utc(value)


class ParsedPage(_Frozen):
    """Output of ArticleParser.parse()."""
    meta: PageMeta
    content: ParsedContent
