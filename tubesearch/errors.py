"""Exceptions raised by the tubesearch library.

Two families:

- PreconditionError: something the user must fix before any request is sent
  (no API key, or a blank query or video id). Never the result of a network call.
- APIError: the YouTube Data API (or the transport in front of it) did not
  return a usable response. ``message`` is the API's own error text when the
  response carried one, otherwise a generic fallback.
"""

from typing import Optional


class PreconditionError(Exception):
    """Raised before any network call when the request cannot be issued."""


class MissingApiKey(PreconditionError):
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "A YouTube API key is required.")


class BlankQuery(PreconditionError):
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Please enter a search query.")


class BlankVideoId(PreconditionError):
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "A video id is required to load comments.")


class APIError(Exception):
    """Non-success response, transport failure or unreadable body from the API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
