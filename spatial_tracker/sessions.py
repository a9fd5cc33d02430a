"""In-memory session registry.

Each chat session owns exactly one PersistedState. Hooks never touch this
module; the API layer reads the current state, passes it through a hook and
stores whatever comes back. Nothing survives a restart.
"""

import uuid

from spatial_tracker.models import PersistedState

_sessions: dict[str, PersistedState] = {}


def create_session(state: PersistedState) -> str:
    """Register a new session and return its id."""
    session_id = uuid.uuid4().hex
    _sessions[session_id] = state
    return session_id


def get_state(session_id: str) -> PersistedState | None:
    return _sessions.get(session_id)


def set_state(session_id: str, state: PersistedState) -> None:
    """Replace a session's state wholesale."""
    if session_id not in _sessions:
        raise KeyError(session_id)
    _sessions[session_id] = state


def delete_session(session_id: str) -> bool:
    """Drop a session. Returns False if it did not exist."""
    return _sessions.pop(session_id, None) is not None


def clear_sessions() -> None:
    """Forget every session (used in tests)."""
    _sessions.clear()
