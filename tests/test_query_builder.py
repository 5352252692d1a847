from datetime import datetime, timedelta, timezone

import pytest

from tubesearch.models import SearchIntent
from tubesearch.query_builder import (
    build_comments_request,
    build_detail_request,
    build_search_request,
    published_after,
)

NOW = datetime(2024, 7, 15, 9, 30, 5, 123456, tzinfo=timezone.utc)


def test_search_request_defaults():
    spec = build_search_request(SearchIntent("python tutorial"), now=NOW)
    assert spec.endpoint == "search"
    assert spec.params == {
        "part": "snippet",
        "maxResults": "50",
        "q": "python tutorial",
        "type": "video",
        "order": "date",
    }
    assert "key" not in spec.params


@pytest.mark.parametrize("duration", ["any", "short", "medium", "long"])
@pytest.mark.parametrize("date_filter", ["all", "1month", "5years"])
def test_optional_params_omitted_exactly_for_any_and_all(duration, date_filter):
    intent = SearchIntent("q", date_filter=date_filter, duration_filter=duration)
    params = build_search_request(intent, now=NOW).params
    assert ("videoDuration" in params) == (duration != "any")
    assert ("publishedAfter" in params) == (date_filter != "all")
    if duration != "any":
        assert params["videoDuration"] == duration


@pytest.mark.parametrize("order", ["date", "viewCount", "relevance", "rating"])
def test_sort_order_passed_verbatim(order):
    params = build_search_request(SearchIntent("q", sort_order=order), now=NOW).params
    assert params["order"] == order


def test_page_token_only_when_cursor_given():
    assert "pageToken" not in build_search_request(SearchIntent("q", page_cursor=""), now=NOW).params
    params = build_search_request(SearchIntent("q", page_cursor="CDIQAA"), now=NOW).params
    assert params["pageToken"] == "CDIQAA"


def test_unknown_filters_rejected():
    with pytest.raises(ValueError):
        build_search_request(SearchIntent("q", duration_filter="tiny"))
    with pytest.raises(ValueError):
        build_search_request(SearchIntent("q", sort_order="likes"))
    with pytest.raises(ValueError):
        build_search_request(SearchIntent("q", date_filter="2weeks"))


def test_one_month_is_one_calendar_month():
    assert published_after("1month", now=NOW) == "2024-06-15T09:30:05.123Z"


@pytest.mark.parametrize(
    "date_filter, expected",
    [
        ("3months", "2024-04-15T09:30:05.123Z"),
        ("6months", "2024-01-15T09:30:05.123Z"),
        ("1year", "2023-07-15T09:30:05.123Z"),
        ("5years", "2019-07-15T09:30:05.123Z"),
    ],
)
def test_other_windows(date_filter, expected):
    assert published_after(date_filter, now=NOW) == expected


def test_month_subtraction_crosses_year_boundary():
    now = datetime(2024, 1, 20, tzinfo=timezone.utc)
    assert published_after("3months", now=now) == "2023-10-20T00:00:00.000Z"


def test_day_overflow_rolls_into_next_month():
    # 31 February 2023 does not exist; it rolls over to 3 March
    now = datetime(2023, 3, 31, 12, 0, tzinfo=timezone.utc)
    assert published_after("1month", now=now) == "2023-03-03T12:00:00.000Z"
    # leap year: 31 February 2024 -> 2 March
    now = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)
    assert published_after("1month", now=now) == "2024-03-02T12:00:00.000Z"


def test_leap_day_minus_one_year():
    now = datetime(2024, 2, 29, tzinfo=timezone.utc)
    assert published_after("1year", now=now) == "2023-03-01T00:00:00.000Z"


def test_non_utc_moment_is_converted():
    kst = timezone(timedelta(hours=9))
    now = datetime(2024, 7, 1, 3, 0, tzinfo=kst)  # 2024-06-30T18:00Z
    assert published_after("1month", now=now) == "2024-05-30T18:00:00.000Z"


def test_all_has_no_bound():
    assert published_after("all", now=NOW) is None


def test_published_after_defaults_to_now():
    value = published_after("1month")
    assert value is not None and value.endswith("Z")


def test_detail_request():
    spec = build_detail_request(["a", "b", "c"])
    assert spec.endpoint == "videos"
    assert spec.params == {"part": "snippet,statistics,contentDetails", "id": "a,b,c"}


def test_detail_request_limits():
    with pytest.raises(ValueError):
        build_detail_request([])
    build_detail_request([f"v{i}" for i in range(50)])
    with pytest.raises(ValueError):
        build_detail_request([f"v{i}" for i in range(51)])


def test_comments_request():
    spec = build_comments_request("abc123")
    assert spec.endpoint == "commentThreads"
    assert spec.params == {
        "part": "snippet",
        "videoId": "abc123",
        "maxResults": "5",
        "textFormat": "plainText",
        "order": "relevance",
    }
    with pytest.raises(ValueError):
        build_comments_request("  ")
