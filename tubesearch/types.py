"""Wire shapes of the YouTube Data API v3 responses used by tubesearch.

Only the fields the dashboard reads are declared; everything is total=False
because the API omits fields freely (statistics disabled, tags absent, ...).
"""

from typing import Dict, List, TypedDict


class Thumbnail(TypedDict, total=False):
    url: str
    width: int
    height: int


class VideoSnippet(TypedDict, total=False):
    publishedAt: str
    channelId: str
    title: str
    description: str
    thumbnails: Dict[str, Thumbnail]
    channelTitle: str
    tags: List[str]
    categoryId: str
    liveBroadcastContent: str


class VideoStatistics(TypedDict, total=False):
    viewCount: str
    likeCount: str
    favoriteCount: str
    commentCount: str


class VideoContentDetails(TypedDict, total=False):
    duration: str
    dimension: str
    definition: str
    caption: str
    licensedContent: bool


class PageInfo(TypedDict, total=False):
    totalResults: int
    resultsPerPage: int


class SearchResultId(TypedDict, total=False):
    kind: str
    videoId: str


class SearchResultItem(TypedDict, total=False):
    id: SearchResultId
    snippet: VideoSnippet


class SearchResponse(TypedDict, total=False):
    kind: str
    etag: str
    nextPageToken: str
    prevPageToken: str
    pageInfo: PageInfo
    items: List[SearchResultItem]


class VideoItem(TypedDict, total=False):
    kind: str
    etag: str
    id: str
    snippet: VideoSnippet
    statistics: VideoStatistics
    contentDetails: VideoContentDetails


class VideoListResponse(TypedDict, total=False):
    kind: str
    etag: str
    items: List[VideoItem]
    pageInfo: PageInfo


class CommentSnippet(TypedDict, total=False):
    textDisplay: str
    authorDisplayName: str
    authorProfileImageUrl: str
    publishedAt: str
    likeCount: int


class TopLevelComment(TypedDict, total=False):
    id: str
    snippet: CommentSnippet


class CommentThreadSnippet(TypedDict, total=False):
    videoId: str
    topLevelComment: TopLevelComment


class CommentThreadItem(TypedDict, total=False):
    id: str
    snippet: CommentThreadSnippet


class CommentThreadResponse(TypedDict, total=False):
    items: List[CommentThreadItem]

