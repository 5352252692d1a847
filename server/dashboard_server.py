"""HTTP backend for the browser dashboard.

Sessions live in process memory only until deleted or the process exits. Each
session wraps one DashboardSession; the browser keeps the session id.

Run locally with:
  uvicorn server.dashboard_server:app --reload
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse

from tubesearch.config import configure_logging, load_settings
from tubesearch.errors import APIError, PreconditionError
from tubesearch.export import export_filename
from tubesearch.session import DashboardSession

from .schemas import (
    ApiKeyRequest,
    CommentOut,
    CommentsResponse,
    CreateSessionRequest,
    CreateSessionResponse,
    ErrorResponse,
    MetaResponse,
    PageResponse,
    SearchRequest,
)

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="tubesearch dashboard")

_sessions: Dict[str, DashboardSession] = {}


def _error(status_code: int, kind: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=message, kind=kind).model_dump()
    return JSONResponse(status_code=status_code, content=body)


def _lookup(session_id: str) -> Optional[DashboardSession]:
    return _sessions.get(session_id)


def _not_found(session_id: str) -> JSONResponse:
    return _error(404, "session", f"unknown session {session_id}")


def _page_response(session: DashboardSession) -> Dict[str, Any]:
    return PageResponse.from_page(
        session.page, session.has_next, session.has_prev, session.error
    ).model_dump()


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/meta", response_model=MetaResponse)
def meta() -> Dict[str, Any]:
    return MetaResponse(
        name="tubesearch", version="0.1", capabilities=["search", "paginate", "comments", "export"]
    ).model_dump()


@app.post("/sessions", response_model=CreateSessionResponse)
def create_session(req: Optional[CreateSessionRequest] = None) -> Dict[str, Any]:
    api_key = (req.api_key if req else None) or load_settings().api_key
    session_id = str(uuid.uuid4())
    session = DashboardSession()
    session.set_api_key(api_key)
    _sessions[session_id] = session
    logger.info("Created session %s (api key %s)", session_id, "set" if session.api_key else "missing")
    return CreateSessionResponse(session_id=session_id).model_dump()


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str) -> Any:
    if _sessions.pop(session_id, None) is None:
        return _not_found(session_id)
    logger.info("Deleted session %s", session_id)
    return {"status": "ok"}


@app.put("/sessions/{session_id}/api-key")
def set_api_key(session_id: str, req: ApiKeyRequest) -> Any:
    session = _lookup(session_id)
    if session is None:
        return _not_found(session_id)
    session.set_api_key(req.api_key)
    return {"status": "ok"}


@app.post("/sessions/{session_id}/search", response_model=PageResponse)
def search(session_id: str, req: SearchRequest) -> Any:
    session = _lookup(session_id)
    if session is None:
        return _not_found(session_id)
    try:
        session.search(
            query=req.query,
            date_filter=req.date_filter,
            duration_filter=req.duration_filter,
            sort_order=req.sort_order,
        )
    except PreconditionError as p:
        return _error(400, "precondition", str(p))
    except APIError as a:
        return _error(502, "api", a.message)
    return _page_response(session)


def _navigate(session_id: str, forward: bool) -> Any:
    session = _lookup(session_id)
    if session is None:
        return _not_found(session_id)
    try:
        page = session.next_page() if forward else session.prev_page()
    except PreconditionError as p:
        return _error(400, "precondition", str(p))
    except APIError as a:
        return _error(502, "api", a.message)
    if page is None:
        return _error(409, "pagination", "no %s page" % ("next" if forward else "previous"))
    return _page_response(session)


@app.post("/sessions/{session_id}/next", response_model=PageResponse)
def next_page(session_id: str) -> Any:
    return _navigate(session_id, forward=True)


@app.post("/sessions/{session_id}/prev", response_model=PageResponse)
def prev_page(session_id: str) -> Any:
    return _navigate(session_id, forward=False)


@app.get("/sessions/{session_id}/page", response_model=PageResponse)
def current_page(session_id: str) -> Any:
    session = _lookup(session_id)
    if session is None:
        return _not_found(session_id)
    return _page_response(session)


@app.get("/sessions/{session_id}/comments/{video_id}", response_model=CommentsResponse)
def open_comments(session_id: str, video_id: str) -> Any:
    session = _lookup(session_id)
    if session is None:
        return _not_found(session_id)
    try:
        comments = session.open_comments(video_id)
    except PreconditionError as p:
        return _error(400, "precondition", str(p))
    if session.comments_error:
        return _error(502, "comments", session.comments_error)
    return CommentsResponse(
        videoId=video_id, comments=[CommentOut.from_record(c) for c in comments]
    ).model_dump()


@app.delete("/sessions/{session_id}/comments")
def close_comments(session_id: str) -> Any:
    session = _lookup(session_id)
    if session is None:
        return _not_found(session_id)
    session.close_comments()
    return {"status": "ok"}


@app.get("/sessions/{session_id}/export.csv")
def export_csv(session_id: str) -> Any:
    session = _lookup(session_id)
    if session is None:
        return _not_found(session_id)
    text = session.csv_text()
    if text is None:
        return _error(404, "export", "no results to export")
    return Response(
        content=text.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
