"""Client-side cursor history backing the previous/next page buttons.

The stack is UI bookkeeping only. Navigation always requests the cursor the
API put on the current page (nextPageToken / prevPageToken); the stack is
never used to compute a cursor, so it can drift from the API's own notion of
position if the API changes cursor semantics between pages.
"""

from typing import List, Optional

from .models import ResultPage


class CursorStack:
    def __init__(self) -> None:
        self._cursors: List[str] = []

    @property
    def cursors(self) -> List[str]:
        return list(self._cursors)

    def __len__(self) -> int:
        return len(self._cursors)

    def reset(self) -> None:
        self._cursors.clear()

    @staticmethod
    def has_next(page: Optional[ResultPage]) -> bool:
        return bool(page and page.next_cursor)

    @staticmethod
    def has_prev(page: Optional[ResultPage]) -> bool:
        return bool(page and page.prev_cursor)

    def go_next(self, page: Optional[ResultPage]) -> Optional[str]:
        """Push and return the page's next cursor, or None at the last page."""
        cursor = page.next_cursor if page else None
        if not cursor:
            return None
        self._cursors.append(cursor)
        return cursor

    def go_prev(self, page: Optional[ResultPage]) -> Optional[str]:
        """Pop the latest pushed cursor and return the page's own prev cursor."""
        cursor = page.prev_cursor if page else None
        if not cursor:
            return None
        if self._cursors:
            self._cursors.pop()
        return cursor
