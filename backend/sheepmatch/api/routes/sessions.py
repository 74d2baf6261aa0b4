"""Game session API routes."""
from fastapi import APIRouter, Depends, HTTPException

from ...models.schemas import (
    CreateSessionRequest,
    ClickRequest,
    ClickResponse,
    ErrorResponse,
    MuteRequest,
    SessionSnapshot,
)
from ...core.exceptions import SessionNotFoundError
from ...core.session import GameSession
from ...core.store import SessionStore
from ..deps import get_sessions

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _load_session(store: SessionStore, session_id: str) -> GameSession:
    """Fetch a session and fire its due timers before handling the request."""
    try:
        session = store.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    session.tick()
    return session


@router.post("", response_model=SessionSnapshot)
async def create_session(
    request: CreateSessionRequest,
    store: SessionStore = Depends(get_sessions),
) -> SessionSnapshot:
    """
    Create a session and start its first level.

    Args:
        request: CreateSessionRequest with starting level and mute flag.
        store: SessionStore dependency.

    Returns:
        SessionSnapshot of the started level.
    """
    session = store.create(muted=request.muted)
    await session.start_level(request.level)
    return SessionSnapshot(**session.snapshot())


@router.get(
    "/{session_id}",
    response_model=SessionSnapshot,
    responses={404: {"model": ErrorResponse}},
)
async def get_session(
    session_id: str,
    store: SessionStore = Depends(get_sessions),
) -> SessionSnapshot:
    """Get the current session snapshot."""
    session = _load_session(store, session_id)
    return SessionSnapshot(**session.snapshot())


@router.post(
    "/{session_id}/click",
    response_model=ClickResponse,
    responses={404: {"model": ErrorResponse}},
)
async def click_tile(
    session_id: str,
    request: ClickRequest,
    store: SessionStore = Depends(get_sessions),
) -> ClickResponse:
    """
    Click a tile.

    Args:
        session_id: Session id.
        request: ClickRequest with the tile id.
        store: SessionStore dependency.

    Returns:
        ClickResponse with acceptance flag and the updated snapshot.
    """
    session = _load_session(store, session_id)
    accepted = session.click(request.tile_id)
    return ClickResponse(accepted=accepted, session=SessionSnapshot(**session.snapshot()))


@router.post(
    "/{session_id}/restart",
    response_model=SessionSnapshot,
    responses={404: {"model": ErrorResponse}},
)
async def restart_level(
    session_id: str,
    store: SessionStore = Depends(get_sessions),
) -> SessionSnapshot:
    """Restart the current level with a fresh tile set."""
    session = _load_session(store, session_id)
    await session.restart_level()
    return SessionSnapshot(**session.snapshot())


@router.post(
    "/{session_id}/next",
    response_model=SessionSnapshot,
    responses={404: {"model": ErrorResponse}},
)
async def next_level(
    session_id: str,
    store: SessionStore = Depends(get_sessions),
) -> SessionSnapshot:
    """Advance to the next level."""
    session = _load_session(store, session_id)
    await session.next_level()
    return SessionSnapshot(**session.snapshot())


@router.post(
    "/{session_id}/mute",
    response_model=SessionSnapshot,
    responses={404: {"model": ErrorResponse}},
)
async def set_muted(
    session_id: str,
    request: MuteRequest,
    store: SessionStore = Depends(get_sessions),
) -> SessionSnapshot:
    """Turn audio cues on or off."""
    session = _load_session(store, session_id)
    session.set_muted(request.muted)
    return SessionSnapshot(**session.snapshot())


@router.delete("/{session_id}", responses={404: {"model": ErrorResponse}})
async def delete_session(
    session_id: str,
    store: SessionStore = Depends(get_sessions),
):
    """Discard a session."""
    try:
        store.delete(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"deleted": session_id}
