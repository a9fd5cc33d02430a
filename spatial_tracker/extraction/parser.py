"""Strict JSON parsing of the spatial packet."""

import json
import logging
from typing import NamedTuple

from pydantic import ValidationError

from spatial_tracker.models import SpatialSnapshot

logger = logging.getLogger(__name__)


class SnapshotParseError(ValueError):
    """The block content is not a valid spatial packet.

    The underlying json/pydantic error is kept as __cause__.
    """


class ParseResult(NamedTuple):
    snapshot: SpatialSnapshot | None
    error: SnapshotParseError | None = None

    @property
    def ok(self) -> bool:
        return self.snapshot is not None


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant {name}")


def _strip_fences(text: str) -> str:
    """Drop a markdown code fence the model sometimes puts inside the tags."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def decode_snapshot(raw: str) -> SpatialSnapshot:
    """Deserialise block content, raising SnapshotParseError on any problem.

    A single bad entry (blank name, non-numeric coordinate) fails the whole
    packet.
    """
    try:
        data = json.loads(_strip_fences(raw), parse_constant=_reject_constant)
    except ValueError as e:  # JSONDecodeError is a ValueError subclass
        raise SnapshotParseError(f"Spatial packet is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotParseError(
            f"Spatial packet must be a JSON object, got {type(data).__name__}"
        )

    try:
        return SpatialSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotParseError(
            f"Spatial packet failed validation ({e.error_count()} error(s)): {e}"
        ) from e


def parse_snapshot(raw: str) -> ParseResult:
    """Like decode_snapshot, but failures come back in the result instead of raising."""
    try:
        snapshot = decode_snapshot(raw)
    except SnapshotParseError as e:
        return ParseResult(None, e)
    logger.debug("parsed spatial packet characters=%d", len(snapshot.characters))
    return ParseResult(snapshot)
