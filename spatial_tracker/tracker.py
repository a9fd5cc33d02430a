"""Spatial tracker — stage hooks around one chat turn.

Turn flow:
  1. before turn  — attach the tracking instruction as a system message.
  2. after turn   — find the first <spatial_system> block in the reply,
                    parse it, replace the stored snapshot and strip the block
                    from the visible message.

State is threaded by value: every hook takes the current PersistedState and
returns the one to carry forward. Nothing is mutated in place, and the
tracker itself holds only its config.

Failure policy: a missing block is normal (the model may skip a turn) and is
silent. A block that fails to parse is logged; the reply is returned
untouched so the raw output stays visible, and the previous state is kept.
Nothing here raises to the caller for bad model output.

When config.active is False every hook is a pass-through. Stored state is
neither cleared nor altered, so re-enabling resumes on it.
"""

from __future__ import annotations

import logging
from typing import Literal, NamedTuple, Protocol

from spatial_tracker.extraction import SnapshotParseError, find_block, parse_snapshot, remove_block
from spatial_tracker.models import PersistedState, TrackerConfig, now_ms
from spatial_tracker.prompts import build_instruction

logger = logging.getLogger(__name__)

Outcome = Literal["updated", "no_block", "parse_failed", "inactive"]


class BeforeTurnResult(NamedTuple):
    system_message: str | None
    state: PersistedState


class MergeResult(NamedTuple):
    state: PersistedState
    message: str
    outcome: Outcome
    error: SnapshotParseError | None = None


# ---------------------------------------------------------------------------
# Merge — the only stateful operation
# ---------------------------------------------------------------------------

def merge_reply(state: PersistedState, reply: str, now: int | None = None) -> MergeResult:
    """Merge the first spatial block of `reply` into `state`.

    On success the snapshot is replaced wholesale (characters absent from the
    new packet are dropped, duplicate names collapse to the later entry) and
    the block is removed from the message. Otherwise both come back as given.
    """
    block = find_block(reply)
    if block is None:
        return MergeResult(state, reply, "no_block")

    result = parse_snapshot(block.content)
    if not result.ok:
        logger.warning("Spatial System: failed to parse packet: %s", result.error)
        return MergeResult(state, reply, "parse_failed", result.error)

    new_state = PersistedState(
        snapshot=result.snapshot.deduplicated(),
        last_update=now_ms() if now is None else now,
    )
    logger.debug("spatial state updated characters=%d", len(new_state.snapshot.characters))
    return MergeResult(new_state, remove_block(reply, block), "updated")


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------

class StageHooks(Protocol):
    def on_session_load(self, saved: PersistedState | None) -> PersistedState: ...

    def on_history_restore(self, state: PersistedState | dict) -> PersistedState: ...

    def on_before_turn(self, state: PersistedState, user_message: str) -> BeforeTurnResult: ...

    def on_after_turn(self, state: PersistedState, reply: str) -> MergeResult: ...


class SpatialTracker:
    """StageHooks implementation for spatial tracking.

    Args:
        config: Toggle. Defaults to active.
    """

    def __init__(self, config: TrackerConfig | None = None) -> None:
        self.config = config or TrackerConfig()

    @property
    def active(self) -> bool:
        return self.config.active

    def on_session_load(self, saved: PersistedState | None) -> PersistedState:
        """Start from the host's saved state, or a fresh empty one."""
        return saved if saved is not None else PersistedState()

    def on_history_restore(self, state: PersistedState | dict) -> PersistedState:
        """Adopt the state of the message the user navigated to.

        Accepts a model or its serialised dict so the host can hand back
        whatever it stored.
        """
        return PersistedState.model_validate(state)

    def on_before_turn(self, state: PersistedState, user_message: str) -> BeforeTurnResult:
        if not self.active:
            return BeforeTurnResult(None, state)
        return BeforeTurnResult(build_instruction(), state)

    def on_after_turn(self, state: PersistedState, reply: str) -> MergeResult:
        if not self.active:
            return MergeResult(state, reply, "inactive")
        return merge_reply(state, reply)
