"""YouTube Data API transport for the dashboard.

`YouTubeClient` sends the requests built by `query_builder`, attaches the API
key and turns every non-success outcome into `APIError`. There is no retry or
backoff: a failed call fails the operation that issued it.

The client is safe to instantiate without an API key; any call will raise
MissingApiKey before touching the network.
"""

import logging
from typing import Any, Dict, List, Optional, cast

import requests

from .config import load_settings
from .errors import APIError, MissingApiKey
from .models import CommentRecord, ResultPage, SearchIntent
from .normalizer import empty_page, listing_video_ids, normalize_page, parse_comment_threads
from .query_builder import (
    RequestSpec,
    build_comments_request,
    build_detail_request,
    build_search_request,
)
from .types import CommentThreadResponse, SearchResponse, VideoListResponse

logger = logging.getLogger(__name__)

SEARCH_FALLBACK_MESSAGE = "An error occurred while searching."
DETAIL_FALLBACK_MESSAGE = "An error occurred while fetching video details."
COMMENTS_FALLBACK_MESSAGE = "Unable to load comments."


def _error_message(resp: Any, fallback: str) -> str:
    try:
        body = resp.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return fallback


class YouTubeClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = load_settings()
        self.api_key = api_key or settings.api_key
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._session = session

    def url_for(self, spec: RequestSpec) -> str:
        return f"{self.base_url}/{spec.endpoint}"

    # --- low-level API call ---
    def execute(self, spec: RequestSpec, fallback_message: str) -> Dict[str, Any]:
        if not self.api_key:
            raise MissingApiKey()

        params: Dict[str, Any] = dict(spec.params)
        params["key"] = self.api_key
        url = self.url_for(spec)
        logger.debug("GET %s %s", url, spec.params)

        try:
            if self._session is not None:
                resp = self._session.get(url, params=params, timeout=self.timeout)
            else:
                resp = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", spec.endpoint, exc)
            raise APIError(str(exc) or fallback_message) from exc

        status = getattr(resp, "status_code", None)
        if status is None or not 200 <= status < 300:
            message = _error_message(resp, fallback_message)
            logger.warning("HTTP %s from %s: %s", status, spec.endpoint, message)
            raise APIError(message, status_code=status)

        try:
            body = resp.json()
        except ValueError as exc:
            raise APIError(fallback_message, status_code=status) from exc
        if not isinstance(body, dict):
            logger.warning("Non-object body from %s: %s", spec.endpoint, type(body).__name__)
            raise APIError(fallback_message, status_code=status)
        return cast(Dict[str, Any], body)

    # --- search pipeline ---
    def search(self, intent: SearchIntent) -> ResultPage:
        """Listing call then detail call, joined in listing order.

        A listing with no items returns an empty page without a detail call.
        """
        listing = cast(
            SearchResponse,
            self.execute(build_search_request(intent), SEARCH_FALLBACK_MESSAGE),
        )
        video_ids = listing_video_ids(listing)
        if not video_ids:
            return empty_page()

        details = cast(
            VideoListResponse,
            self.execute(build_detail_request(video_ids), DETAIL_FALLBACK_MESSAGE),
        )
        page = normalize_page(listing, details)
        logger.info(
            "Search %r returned %d of %d listed videos (total %d)",
            intent.query_text,
            len(page.records),
            len(video_ids),
            page.total_results,
        )
        return page

    def fetch_comments(self, video_id: str) -> List[CommentRecord]:
        """Up to five top-level comments, relevance ordered, as plain text."""
        data = cast(
            CommentThreadResponse,
            self.execute(build_comments_request(video_id), COMMENTS_FALLBACK_MESSAGE),
        )
        return parse_comment_threads(data)
