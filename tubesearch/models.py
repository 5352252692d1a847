"""Domain records shared by the query builder, normalizer and session."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

DATE_FILTERS = ("all", "1month", "3months", "6months", "1year", "5years")
DURATION_FILTERS = ("any", "short", "medium", "long")
SORT_ORDERS = ("date", "viewCount", "relevance", "rating")

WATCH_URL = "https://www.youtube.com/watch?v={}"
CHANNEL_URL = "https://www.youtube.com/channel/{}"


@dataclass(frozen=True)
class SearchIntent:
    query_text: str
    date_filter: str = "all"
    duration_filter: str = "any"
    sort_order: str = "date"
    page_cursor: Optional[str] = None


@dataclass(frozen=True)
class Thumbnails:
    default: Optional[str] = None
    medium: Optional[str] = None
    high: Optional[str] = None


@dataclass(frozen=True)
class VideoRecord:
    id: str
    title: str = ""
    description: str = ""
    channel_id: str = ""
    channel_title: str = ""
    published_at: str = ""
    thumbnails: Thumbnails = field(default_factory=Thumbnails)
    # None means the video carries no tags field at all
    tags: Optional[Tuple[str, ...]] = None
    duration_iso8601: Optional[str] = None
    view_count: Optional[str] = None
    comment_count: Optional[str] = None
    like_count: Optional[str] = None
    category_id: Optional[str] = None
    live_broadcast_content: Optional[str] = None

    @property
    def url(self) -> str:
        return WATCH_URL.format(self.id)

    @property
    def channel_url(self) -> str:
        return CHANNEL_URL.format(self.channel_id)


@dataclass(frozen=True)
class ResultPage:
    records: Tuple[VideoRecord, ...] = ()
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None
    total_results: int = 0


@dataclass(frozen=True)
class CommentRecord:
    id: str
    author_display_name: str = ""
    author_profile_image_url: Optional[str] = None
    published_at: str = ""
    text_display: str = ""
    like_count: int = 0
