"""Per-user dashboard state and the operations that mutate it.

A DashboardSession owns everything a single dashboard view holds in memory:
the API key, the current search filters, the displayed ResultPage, the cursor
history and the comment panel. Nothing here is global, so a fresh session can
be built for every test or every browser tab.

Every search and every comment fetch takes a sequence number when it starts.
When it completes, its result is applied only if no newer request of the same
kind has started meanwhile; a superseded response is discarded.
"""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

from .client import YouTubeClient
from .errors import APIError, BlankQuery, BlankVideoId, MissingApiKey
from .export import build_csv, write_csv
from .models import (
    DATE_FILTERS,
    DURATION_FILTERS,
    SORT_ORDERS,
    CommentRecord,
    ResultPage,
    SearchIntent,
)
from .normalizer import empty_page
from .pagination import CursorStack

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], YouTubeClient]


def _default_client_factory(api_key: str) -> YouTubeClient:
    return YouTubeClient(api_key=api_key)


class DashboardSession:
    def __init__(self, api_key: Optional[str] = None, client_factory: Optional[ClientFactory] = None):
        self.api_key = api_key
        self._client_factory = client_factory or _default_client_factory

        self.query = ""
        self.date_filter = "all"
        self.duration_filter = "any"
        self.sort_order = "date"

        self.page: ResultPage = empty_page()
        self.cursors = CursorStack()
        self.error: Optional[str] = None
        self.loading = False

        self.expanded_video_id: Optional[str] = None
        self.comments: List[CommentRecord] = []
        self.comments_error: Optional[str] = None
        self.comments_loading = False

        self._search_seq = 0
        self._comments_seq = 0
        self._seq_lock = threading.Lock()

    def set_api_key(self, api_key: Optional[str]) -> None:
        self.api_key = (api_key or "").strip() or None

    @property
    def has_next(self) -> bool:
        return self.cursors.has_next(self.page)

    @property
    def has_prev(self) -> bool:
        return self.cursors.has_prev(self.page)

    def current_intent(self, cursor: Optional[str] = None) -> SearchIntent:
        return SearchIntent(
            query_text=self.query.strip(),
            date_filter=self.date_filter,
            duration_filter=self.duration_filter,
            sort_order=self.sort_order,
            page_cursor=cursor or None,
        )

    def _check_preconditions(self) -> None:
        if not self.api_key:
            raise MissingApiKey("Enter your YouTube API key first.")
        if not self.query.strip():
            raise BlankQuery()

    # --- search and navigation ---
    def search(
        self,
        query: Optional[str] = None,
        date_filter: Optional[str] = None,
        duration_filter: Optional[str] = None,
        sort_order: Optional[str] = None,
        page_cursor: Optional[str] = None,
    ) -> ResultPage:
        """Start a new search; cursor history restarts from the first page.

        ``page_cursor`` opens the search at a cursor the API handed out earlier.
        """
        if query is not None:
            self.query = query
        if date_filter is not None:
            self.date_filter = date_filter
        if duration_filter is not None:
            self.duration_filter = duration_filter
        if sort_order is not None:
            self.sort_order = sort_order

        for name, value, allowed in (
            ("date filter", self.date_filter, DATE_FILTERS),
            ("duration filter", self.duration_filter, DURATION_FILTERS),
            ("sort order", self.sort_order, SORT_ORDERS),
        ):
            if value not in allowed:
                raise ValueError(f"unknown {name}: {value!r}")

        self._check_preconditions()
        self.cursors.reset()
        return self._run(page_cursor)

    def next_page(self) -> Optional[ResultPage]:
        self._check_preconditions()
        cursor = self.cursors.go_next(self.page)
        if cursor is None:
            return None
        return self._run(cursor)

    def prev_page(self) -> Optional[ResultPage]:
        self._check_preconditions()
        cursor = self.cursors.go_prev(self.page)
        if cursor is None:
            return None
        return self._run(cursor)

    def _take_search_ticket(self) -> int:
        with self._seq_lock:
            self._search_seq += 1
            return self._search_seq

    def _take_comments_ticket(self) -> int:
        with self._seq_lock:
            self._comments_seq += 1
            return self._comments_seq

    def _run(self, cursor: Optional[str]) -> ResultPage:
        ticket = self._take_search_ticket()
        intent = self.current_intent(cursor)
        self.loading = True
        self.error = None

        try:
            page = self._client_factory(self.api_key or "").search(intent)
        except APIError as exc:
            if ticket == self._search_seq:
                self.page = empty_page()
                self.error = exc.message
            raise
        finally:
            if ticket == self._search_seq:
                self.loading = False

        if ticket != self._search_seq:
            logger.debug("Discarding superseded search #%d (latest #%d)", ticket, self._search_seq)
            return self.page

        self.page = page
        return page

    # --- comment panel ---
    def open_comments(self, video_id: str) -> List[CommentRecord]:
        """Load the comment panel for ``video_id``.

        A blank id or a missing key raises PreconditionError and leaves the
        panel as it was. API failures are kept in ``comments_error`` and never
        touch the result page.
        """
        if not (video_id or "").strip():
            raise BlankVideoId()
        if not self.api_key:
            raise MissingApiKey()

        ticket = self._take_comments_ticket()
        self.expanded_video_id = video_id
        self.comments = []
        self.comments_error = None
        self.comments_loading = True

        try:
            comments = self._client_factory(self.api_key).fetch_comments(video_id)
        except APIError as exc:
            if ticket == self._comments_seq:
                self.comments_error = exc.message
            return []
        finally:
            if ticket == self._comments_seq:
                self.comments_loading = False

        if ticket != self._comments_seq:
            logger.debug("Discarding comments for %s: panel moved on", video_id)
            return self.comments

        self.comments = comments
        return comments

    def close_comments(self) -> None:
        # bump the sequence so an in-flight fetch lands nowhere
        self._take_comments_ticket()
        self.expanded_video_id = None
        self.comments = []
        self.comments_error = None
        self.comments_loading = False

    def toggle_comments(self, video_id: str) -> List[CommentRecord]:
        if self.expanded_video_id == video_id:
            self.close_comments()
            return []
        return self.open_comments(video_id)

    # --- export ---
    def csv_text(self) -> Optional[str]:
        if not self.page.records:
            return None
        return build_csv(self.page.records)

    def export_csv(self, directory: Union[str, Path] = ".", now: Optional[datetime] = None) -> Optional[Path]:
        """Write the displayed page to CSV; returns None when nothing is displayed."""
        if not self.page.records:
            return None
        path = write_csv(self.page.records, directory, now=now)
        logger.info("Exported %d videos to %s", len(self.page.records), path)
        return path
