"""Session lifecycle endpoints: load, restore, before turn, after turn."""

from fastapi import APIRouter, HTTPException

from spatial_tracker import config, sessions
from spatial_tracker.models import PersistedState
from spatial_tracker.render import render_state
from spatial_tracker.tracker import SpatialTracker

from .models import CreateSession, TurnBody

router = APIRouter()


def _tracker() -> SpatialTracker:
    return SpatialTracker(config.get_config())


def _require_state(session_id: str) -> PersistedState:
    state = sessions.get_state(session_id)
    if state is None:
        raise HTTPException(404, "Session not found")
    return state


@router.post("/sessions", status_code=201)
async def create_session(body: CreateSession | None = None):
    """Start a session, optionally from a state the host saved earlier."""
    saved = body.state if body else None
    state = _tracker().on_session_load(saved)
    session_id = sessions.create_session(state)
    return {"id": session_id, "state": state}


@router.get("/sessions/{session_id}")
async def get_session(session_id: str):
    """Get the current state and its text rendering."""
    state = _require_state(session_id)
    return {"id": session_id, "state": state, "display": render_state(state)}


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Forget a session."""
    if not sessions.delete_session(session_id):
        raise HTTPException(404, "Session not found")
    return {"ok": True}


@router.put("/sessions/{session_id}/state")
async def restore_state(session_id: str, body: PersistedState):
    """Replace the session state, e.g. when the user browses history."""
    _require_state(session_id)
    state = _tracker().on_history_restore(body)
    sessions.set_state(session_id, state)
    return {"id": session_id, "state": state}


@router.post("/sessions/{session_id}/before-turn")
async def before_turn(session_id: str, body: TurnBody):
    """Get the system instruction to attach to the pending prompt."""
    state = _require_state(session_id)
    result = _tracker().on_before_turn(state, body.content)
    return {"system_message": result.system_message, "state": result.state}


@router.post("/sessions/{session_id}/after-turn")
async def after_turn(session_id: str, body: TurnBody):
    """Merge the model reply into the session and return the cleaned message."""
    state = _require_state(session_id)
    result = _tracker().on_after_turn(state, body.content)
    sessions.set_state(session_id, result.state)
    return {"message": result.message, "state": result.state, "outcome": result.outcome}
