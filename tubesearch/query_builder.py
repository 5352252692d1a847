"""Translate a SearchIntent into the YouTube Data API requests the dashboard issues.

Builders are pure: they never touch the network and never read the API key,
which the transport attaches when the request is sent.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, NamedTuple, Optional, Sequence

from .models import DATE_FILTERS, DURATION_FILTERS, SORT_ORDERS, SearchIntent

SEARCH_ENDPOINT = "search"
VIDEOS_ENDPOINT = "videos"
COMMENT_THREADS_ENDPOINT = "commentThreads"

# The API nominally serves up to 50 per page; anything above is rejected.
PAGE_SIZE = 50
COMMENTS_PAGE_SIZE = 5

# filter -> months to subtract
_DATE_FILTER_MONTHS = {
    "1month": 1,
    "3months": 3,
    "6months": 6,
    "1year": 12,
    "5years": 60,
}


class RequestSpec(NamedTuple):
    endpoint: str
    params: Dict[str, str]


def _subtract_months(moment: datetime, months: int) -> datetime:
    # Keeps the day of month and lets it overflow into the next month
    # (31 March - 1 month -> 2/3 March), the same rollover JavaScript Date uses.
    index = moment.year * 12 + (moment.month - 1) - months
    year, month0 = divmod(index, 12)
    first = moment.replace(year=year, month=month0 + 1, day=1)
    return first + timedelta(days=moment.day - 1)


def _rfc3339(moment: datetime) -> str:
    return "%s.%03dZ" % (moment.strftime("%Y-%m-%dT%H:%M:%S"), moment.microsecond // 1000)


def published_after(date_filter: str, now: Optional[datetime] = None) -> Optional[str]:
    """Lower publication bound for ``date_filter``, or None for "all"."""
    if date_filter not in DATE_FILTERS:
        raise ValueError(f"unknown date filter: {date_filter!r}")
    if date_filter == "all":
        return None

    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return _rfc3339(_subtract_months(moment, _DATE_FILTER_MONTHS[date_filter]))


def build_search_request(intent: SearchIntent, now: Optional[datetime] = None) -> RequestSpec:
    """Listing call for one page of ``intent``.

    Only structural checks happen here; a blank query is the caller's problem.
    """
    if intent.duration_filter not in DURATION_FILTERS:
        raise ValueError(f"unknown duration filter: {intent.duration_filter!r}")
    if intent.sort_order not in SORT_ORDERS:
        raise ValueError(f"unknown sort order: {intent.sort_order!r}")

    params: Dict[str, str] = {
        "part": "snippet",
        "maxResults": str(PAGE_SIZE),
        "q": intent.query_text,
        "type": "video",
        "order": intent.sort_order,
    }
    if intent.page_cursor:
        params["pageToken"] = intent.page_cursor
    if intent.duration_filter != "any":
        params["videoDuration"] = intent.duration_filter

    lower_bound = published_after(intent.date_filter, now=now)
    if lower_bound:
        params["publishedAfter"] = lower_bound

    return RequestSpec(SEARCH_ENDPOINT, params)


def build_detail_request(video_ids: Sequence[str]) -> RequestSpec:
    """Statistics and content details for exactly ``video_ids``, in one call."""
    ids = list(video_ids)
    if not ids:
        raise ValueError("detail request needs at least one video id")
    if len(ids) > PAGE_SIZE:
        raise ValueError(f"detail request accepts at most {PAGE_SIZE} ids, got {len(ids)}")
    return RequestSpec(
        VIDEOS_ENDPOINT,
        {"part": "snippet,statistics,contentDetails", "id": ",".join(ids)},
    )


def build_comments_request(video_id: str) -> RequestSpec:
    if not video_id or not video_id.strip():
        raise ValueError("comments request needs a video id")
    return RequestSpec(
        COMMENT_THREADS_ENDPOINT,
        {
            "part": "snippet",
            "videoId": video_id,
            "maxResults": str(COMMENTS_PAGE_SIZE),
            "textFormat": "plainText",
            "order": "relevance",
        },
    )
