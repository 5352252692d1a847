"""Join the listing and detail responses into one ResultPage.

The listing call decides which videos appear and in what order; the detail
call only enriches them. A listed video the detail call did not return (it
went private or was removed between the two calls) is dropped from the page
rather than shown half-filled.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .models import CommentRecord, ResultPage, Thumbnails, VideoRecord
from .query_builder import COMMENTS_PAGE_SIZE
from .types import CommentThreadResponse, SearchResponse, VideoItem, VideoListResponse

logger = logging.getLogger(__name__)


def empty_page() -> ResultPage:
    return ResultPage(records=(), next_cursor=None, prev_cursor=None, total_results=0)


def listing_video_ids(listing: SearchResponse) -> List[str]:
    """Ordered, de-duplicated video ids of a listing response."""
    seen = set()
    ids = []
    for item in listing.get("items") or []:
        vid = (item.get("id") or {}).get("videoId")
        if vid and vid not in seen:
            seen.add(vid)
            ids.append(vid)
    return ids


def _thumbnails(snippet: Mapping[str, Any]) -> Thumbnails:
    thumbs = snippet.get("thumbnails") or {}
    return Thumbnails(
        default=(thumbs.get("default") or {}).get("url"),
        medium=(thumbs.get("medium") or {}).get("url"),
        high=(thumbs.get("high") or {}).get("url"),
    )


def _tags(snippet: Mapping[str, Any]) -> Optional[Tuple[str, ...]]:
    tags = snippet.get("tags")
    if tags is None:
        return None
    return tuple(str(t) for t in tags)


def _as_count(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def build_record(video_id: str, listing_snippet: Mapping[str, Any], detail: VideoItem) -> VideoRecord:
    # detail snippet wins; listing snippet fills whatever it lacks
    snippet: Dict[str, Any] = dict(listing_snippet)
    snippet.update(detail.get("snippet") or {})
    stats = detail.get("statistics") or {}
    content = detail.get("contentDetails") or {}

    return VideoRecord(
        id=video_id,
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        channel_id=snippet.get("channelId") or "",
        channel_title=snippet.get("channelTitle") or "",
        published_at=snippet.get("publishedAt") or "",
        thumbnails=_thumbnails(snippet),
        tags=_tags(snippet),
        duration_iso8601=content.get("duration"),
        view_count=_as_count(stats.get("viewCount")),
        comment_count=_as_count(stats.get("commentCount")),
        like_count=_as_count(stats.get("likeCount")),
        category_id=snippet.get("categoryId"),
        live_broadcast_content=snippet.get("liveBroadcastContent"),
    )


def normalize_page(listing: SearchResponse, details: VideoListResponse) -> ResultPage:
    """Merge ``details`` into ``listing`` order; cursors come from ``listing`` only."""
    items = listing.get("items") or []
    if not items:
        return empty_page()

    by_id = {v["id"]: v for v in details.get("items") or [] if v.get("id")}

    records = []
    seen = set()
    for item in items:
        vid = (item.get("id") or {}).get("videoId")
        if not vid or vid in seen:
            continue
        seen.add(vid)
        detail = by_id.get(vid)
        if detail is None:
            logger.debug("Dropping %s: no detail entry returned", vid)
            continue
        records.append(build_record(vid, item.get("snippet") or {}, detail))

    page_info = listing.get("pageInfo") or {}
    return ResultPage(
        records=tuple(records),
        next_cursor=listing.get("nextPageToken") or None,
        prev_cursor=listing.get("prevPageToken") or None,
        total_results=int(page_info.get("totalResults") or 0),
    )


def parse_comment_threads(response: CommentThreadResponse) -> List[CommentRecord]:
    comments = []
    for thread in (response.get("items") or [])[:COMMENTS_PAGE_SIZE]:
        top = (thread.get("snippet") or {}).get("topLevelComment") or {}
        snip = top.get("snippet") or {}
        comments.append(
            CommentRecord(
                id=thread.get("id") or top.get("id") or "",
                author_display_name=snip.get("authorDisplayName") or "",
                author_profile_image_url=snip.get("authorProfileImageUrl") or None,
                published_at=snip.get("publishedAt") or "",
                text_display=snip.get("textDisplay") or "",
                like_count=int(snip.get("likeCount") or 0),
            )
        )
    return comments
