from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from tubesearch.models import CommentRecord, ResultPage, VideoRecord


class ThumbnailsOut(BaseModel):
    default: Optional[str] = None
    medium: Optional[str] = None
    high: Optional[str] = None


class VideoOut(BaseModel):
    id: str
    url: str
    title: str
    description: str
    channelId: str
    channelTitle: str
    channelUrl: str
    publishedAt: str
    thumbnails: ThumbnailsOut
    tags: Optional[List[str]] = None
    duration: Optional[str] = None
    viewCount: Optional[str] = None
    commentCount: Optional[str] = None
    likeCount: Optional[str] = None

    @classmethod
    def from_record(cls, r: VideoRecord) -> "VideoOut":
        return cls(
            id=r.id,
            url=r.url,
            title=r.title,
            description=r.description,
            channelId=r.channel_id,
            channelTitle=r.channel_title,
            channelUrl=r.channel_url,
            publishedAt=r.published_at,
            thumbnails=ThumbnailsOut(
                default=r.thumbnails.default, medium=r.thumbnails.medium, high=r.thumbnails.high
            ),
            tags=list(r.tags) if r.tags is not None else None,
            duration=r.duration_iso8601,
            viewCount=r.view_count,
            commentCount=r.comment_count,
            likeCount=r.like_count,
        )


class CommentOut(BaseModel):
    id: str
    authorDisplayName: str
    authorProfileImageUrl: Optional[str] = None
    publishedAt: str
    textDisplay: str
    likeCount: int

    @classmethod
    def from_record(cls, c: CommentRecord) -> "CommentOut":
        return cls(
            id=c.id,
            authorDisplayName=c.author_display_name,
            authorProfileImageUrl=c.author_profile_image_url,
            publishedAt=c.published_at,
            textDisplay=c.text_display,
            likeCount=c.like_count,
        )


class CreateSessionRequest(BaseModel):
    api_key: Optional[str] = Field(None, description="Falls back to YOUTUBE_API_KEY when omitted")


class CreateSessionResponse(BaseModel):
    session_id: str


class ApiKeyRequest(BaseModel):
    api_key: str


class SearchRequest(BaseModel):
    query: str
    date_filter: Literal["all", "1month", "3months", "6months", "1year", "5years"] = "all"
    duration_filter: Literal["any", "short", "medium", "long"] = "any"
    sort_order: Literal["date", "viewCount", "relevance", "rating"] = "date"


class PageResponse(BaseModel):
    videos: List[VideoOut]
    nextPageToken: Optional[str] = None
    prevPageToken: Optional[str] = None
    totalResults: int
    hasNext: bool
    hasPrev: bool
    error: Optional[str] = None

    @classmethod
    def from_page(
        cls, page: ResultPage, has_next: bool, has_prev: bool, error: Optional[str] = None
    ) -> "PageResponse":
        return cls(
            videos=[VideoOut.from_record(r) for r in page.records],
            nextPageToken=page.next_cursor,
            prevPageToken=page.prev_cursor,
            totalResults=page.total_results,
            hasNext=has_next,
            hasPrev=has_prev,
            error=error,
        )


class CommentsResponse(BaseModel):
    videoId: str
    comments: List[CommentOut]


class ErrorResponse(BaseModel):
    error: str
    kind: str


class MetaResponse(BaseModel):
    name: str
    version: str
    capabilities: List[str]
