"""Spatial tracking stage for chat roleplay.

Asks the model to append a <spatial_system> JSON packet with every
character's position relative to the user, strips it from the visible reply
and keeps the latest packet as per-message state.
"""

from spatial_tracker.models import (  # noqa: F401
    CharacterEntry,
    PersistedState,
    SpatialSnapshot,
    TrackerConfig,
)
from spatial_tracker.tracker import (  # noqa: F401
    BeforeTurnResult,
    MergeResult,
    SpatialTracker,
    StageHooks,
    merge_reply,
)
