from typing import Any, Dict, List, Optional

import pytest


class DummyResponse:
    def __init__(self, json_data, status_code=200):
        self._json = json_data
        self.status_code = status_code

    def json(self):
        if isinstance(self._json, Exception):
            raise self._json
        return self._json


def search_item(video_id: str, title: Optional[str] = None, channel: str = "Chan A") -> Dict[str, Any]:
    return {
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "title": title or f"Listing {video_id}",
            "description": f"desc {video_id}",
            "channelId": f"UC-{channel}",
            "channelTitle": channel,
            "publishedAt": "2024-05-01T10:00:00Z",
            "thumbnails": {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"},
                "high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"},
            },
        },
    }


def video_item(
    video_id: str,
    title: Optional[str] = None,
    duration: str = "PT2M30S",
    views: Optional[str] = "1000",
    comments: Optional[str] = "12",
    tags: Optional[List[str]] = None,
) -> Dict[str, Any]:
    stats: Dict[str, str] = {"likeCount": "7"}
    if views is not None:
        stats["viewCount"] = views
    if comments is not None:
        stats["commentCount"] = comments
    snippet: Dict[str, Any] = {
        "title": title or f"Video {video_id}",
        "description": f"full desc {video_id}",
        "channelId": "UC-Chan A",
        "channelTitle": "Chan A",
        "publishedAt": "2024-05-01T10:00:00Z",
        "categoryId": "27",
        "liveBroadcastContent": "none",
    }
    if tags is not None:
        snippet["tags"] = tags
    return {
        "id": video_id,
        "snippet": snippet,
        "contentDetails": {"duration": duration},
        "statistics": stats,
    }


def search_response(ids, next_token=None, prev_token=None, total=None) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "items": [search_item(i) for i in ids],
        "pageInfo": {"totalResults": total if total is not None else len(ids), "resultsPerPage": 50},
    }
    if next_token:
        body["nextPageToken"] = next_token
    if prev_token:
        body["prevPageToken"] = prev_token
    return body


def comment_thread(thread_id: str, text: str, likes: int = 0) -> Dict[str, Any]:
    return {
        "id": thread_id,
        "snippet": {
            "topLevelComment": {
                "id": f"c-{thread_id}",
                "snippet": {
                    "textDisplay": text,
                    "authorDisplayName": f"user {thread_id}",
                    "authorProfileImageUrl": f"https://yt3.ggpht.com/{thread_id}.jpg",
                    "publishedAt": "2024-05-02T08:30:00Z",
                    "likeCount": likes,
                },
            }
        },
    }


class FakeYouTube:
    """Stands in for requests.get against the three Data API endpoints.

    Search pages are keyed by pageToken (None for the first page). The videos
    endpoint answers in reverse request order, as the real API may reorder.
    """

    def __init__(self):
        self.calls: List[Any] = []
        self.search_pages: Dict[Optional[str], Dict[str, Any]] = {}
        self.videos: Dict[str, Dict[str, Any]] = {}
        self.comments: Dict[str, Dict[str, Any]] = {}
        self.errors: Dict[str, Any] = {}

    def endpoints(self) -> List[str]:
        return [c[0] for c in self.calls]

    def get(self, url, params=None, timeout=None):
        endpoint = url.rsplit("/", 1)[-1]
        params = dict(params or {})
        self.calls.append((endpoint, params))
        if endpoint in self.errors:
            status, body = self.errors[endpoint]
            return DummyResponse(body, status_code=status)
        if endpoint == "search":
            return DummyResponse(self.search_pages.get(params.get("pageToken"), {"items": []}))
        if endpoint == "videos":
            ids = params["id"].split(",")
            items = [self.videos[i] for i in reversed(ids) if i in self.videos]
            return DummyResponse({"items": items})
        if endpoint == "commentThreads":
            return DummyResponse(self.comments.get(params["videoId"], {"items": []}))
        return DummyResponse({}, status_code=404)


@pytest.fixture
def fake_api(monkeypatch):
    monkeypatch.delenv("YOUTUBE_API_BASE_URL", raising=False)
    monkeypatch.delenv("YOUTUBE_HTTP_TIMEOUT", raising=False)
    fake = FakeYouTube()
    monkeypatch.setattr("requests.get", fake.get)
    return fake
