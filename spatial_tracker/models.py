"""Core domain models.

Every hook and parser works on these types. Pydantic validates the packet the
model writes into its reply, the state the host hands back on history
navigation, and the config.
"""

from __future__ import annotations

import math
import re
import time
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Integer or decimal literal with an optional sign: "5", "-3", "+2", "5.5", ".5"
_NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def coerce_coordinate(value: Any) -> float:
    """Accept a number or a numeric-looking string, reject everything else."""
    # bool is an int subclass, but true/false is never a coordinate
    if isinstance(value, bool):
        raise ValueError("coordinate must be a number, got a boolean")
    if isinstance(value, str) and _NUMERIC_RE.fullmatch(value.strip()):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        raise ValueError(f"coordinate must be a number or numeric string, got {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        # ints past the float range, e.g. a 400-digit literal
        raise ValueError("coordinate out of range") from e
    if not math.isfinite(number):
        raise ValueError("coordinate must be finite")
    return number


class CharacterEntry(BaseModel):
    """One tracked character, positioned relative to the user at (0, 0)."""

    name: str
    x: float  # negative = left, positive = right
    y: float  # negative = behind, positive = in front
    status: str = ""

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("x", "y", mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> float:
        return coerce_coordinate(v)


class SpatialSnapshot(BaseModel):
    """All character positions reported in one packet, in reply order."""

    characters: list[CharacterEntry] = Field(default_factory=list)

    def deduplicated(self) -> SpatialSnapshot:
        """Return a copy with one entry per name.

        A later entry overwrites an earlier one with the same name; the
        merged entry keeps the slot where the name first appeared.
        """
        by_name: dict[str, CharacterEntry] = {}
        for entry in self.characters:
            by_name[entry.name] = entry
        return SpatialSnapshot(characters=list(by_name.values()))


class PersistedState(BaseModel):
    """Per-message tracker state carried forward by the host."""

    snapshot: SpatialSnapshot = Field(default_factory=SpatialSnapshot)
    last_update: int = Field(default_factory=now_ms)  # epoch milliseconds


class TrackerConfig(BaseModel):
    """The single user-facing switch."""

    active: bool = True
