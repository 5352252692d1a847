# tubesearch: YouTube search dashboard core
from .client import YouTubeClient
from .errors import APIError, BlankQuery, BlankVideoId, MissingApiKey, PreconditionError
from .models import CommentRecord, ResultPage, SearchIntent, Thumbnails, VideoRecord
from .pagination import CursorStack
from .session import DashboardSession

__all__ = [
    "YouTubeClient",
    "DashboardSession",
    "CursorStack",
    "SearchIntent",
    "VideoRecord",
    "ResultPage",
    "CommentRecord",
    "Thumbnails",
    "APIError",
    "PreconditionError",
    "MissingApiKey",
    "BlankQuery",
    "BlankVideoId",
]
