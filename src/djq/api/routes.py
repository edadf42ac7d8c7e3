"""JSON API routes for sessions, submissions and settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, BackgroundTasks, Query, Request

from djq.api.models import (
    ClearRequest,
    CreateSessionRequest,
    SubmitRequest,
    UpdateSettingsRequest,
)
from djq.domain.submissions import format_timestamp

if TYPE_CHECKING:
    from djq.containers import AppContainer
    from djq.domain.sessions import SessionRecord

router = APIRouter(prefix="/api", tags=["api"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/sessions")
async def create_session(
    request: Request, body: CreateSessionRequest | None = None
) -> dict[str, object]:
    """Create a session and return its code."""
    body = body or CreateSessionRequest()
    session = _container(request).session_service.create(body.name)
    return {
        "success": True,
        "session": {
            "id": session.id,
            "name": session.name,
            "createdAt": format_timestamp(session.created_at),
        },
    }


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> dict[str, object]:
    """Return a single session."""
    session = _container(request).session_service.get(session_id)
    return {"success": True, "session": _session_payload(session)}


@router.get("/sessions")
async def list_sessions(request: Request) -> dict[str, object]:
    """Return active sessions, newest first."""
    sessions = _container(request).session_service.list_active()
    return {"success": True, "sessions": [_session_payload(s) for s in sessions]}


@router.post("/submit")
async def submit(
    request: Request,
    background_tasks: BackgroundTasks,
    body: SubmitRequest | None = None,
) -> dict[str, object]:
    """Store a song request; enrichment runs after the response is sent."""
    body = body or SubmitRequest()
    service = _container(request).submission_service
    record = service.submit(
        session_id=body.session_id,
        song_name=body.song_name,
        artist=body.artist,
        user_name=body.user_name,
    )
    if service.enricher is not None:
        background_tasks.add_task(
            service.enrich_in_background,
            record.id,
            record.song_name,
            record.artist,
            body.spotify_id,
        )
    return {
        "success": True,
        "message": "Submission saved successfully",
        "id": record.id,
    }


@router.get("/submissions")
async def list_submissions(
    request: Request, session_id: str | None = Query(default=None, alias="sessionId")
) -> list[dict[str, object]]:
    """Return the submissions of one session."""
    records = _container(request).submission_service.list_by_session(session_id)
    return [record.to_row() for record in records]


@router.delete("/clear")
async def clear_submissions(
    request: Request, body: ClearRequest | None = None
) -> dict[str, object]:
    """Delete every submission of one session."""
    body = body or ClearRequest()
    deleted = _container(request).submission_service.clear_by_session(
        body.session_id
    )
    return {
        "success": True,
        "message": f"Cleared {deleted} submissions",
        "deletedCount": deleted,
    }


@router.post("/update-settings")
async def update_settings(
    request: Request, body: UpdateSettingsRequest | None = None
) -> dict[str, object]:
    """Store a session's display settings."""
    body = body or UpdateSettingsRequest()
    _container(request).session_service.update_settings(
        body.session_id,
        welcome_message=body.welcome_message,
        subtitle_message=body.subtitle_message,
        background=body.background,
    )
    return {"success": True}


@router.get("/settings")
async def get_settings(
    request: Request, session_id: str | None = Query(default=None, alias="sessionId")
) -> dict[str, object]:
    """Return display settings with defaults resolved."""
    settings = _container(request).session_service.get_settings(session_id)
    return {
        "welcomeMessage": settings.welcome_message,
        "subtitleMessage": settings.subtitle_message,
        "background": settings.background,
    }


@router.get("/spotify/suggestions")
async def spotify_suggestions(
    request: Request, q: str | None = None
) -> dict[str, object]:
    """Return track suggestions for autocomplete."""
    suggestions = await _container(request).suggestion_service.suggest(q)
    return {
        "suggestions": [
            {
                "songName": suggestion.song_name,
                "artist": suggestion.artist,
                "album": suggestion.album,
                "spotifyId": suggestion.spotify_id,
                "bpm": suggestion.bpm,
                "key": suggestion.key,
            }
            for suggestion in suggestions
        ]
    }


def _session_payload(session: SessionRecord) -> dict[str, object]:
    return {
        "id": session.id,
        "name": session.name,
        "created_at": format_timestamp(session.created_at),
        "is_active": session.is_active,
        "welcome_message": session.welcome_message,
        "subtitle_message": session.subtitle_message,
        "background": session.background,
    }
