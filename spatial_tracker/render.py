"""Plain-text status monitor for the tracked characters."""

from spatial_tracker.models import PersistedState

TITLE = "Spatial Status Monitor"
EMPTY_HINT = "No spatial data tracking yet. Start chatting!"
FOOTER = "* Grid Center (0,0) is User."


def _fmt(value: float) -> str:
    # 5.0 -> "5", 5.5 -> "5.5"
    return str(int(value)) if value.is_integer() else str(value)


def render_state(state: PersistedState) -> str:
    """Render a read-only text view of the current snapshot."""
    lines = [TITLE, "=" * len(TITLE), ""]
    chars = state.snapshot.characters
    if not chars:
        lines.append(EMPTY_HINT)
    for char in chars:
        lines.append(char.name)
        lines.append(f"  Status: {char.status}")
        lines.append(f"  X (Right/Left): {_fmt(char.x)}    Y (Front/Back): {_fmt(char.y)}")
        lines.append("")
    if chars:
        lines.pop()
    lines.append("")
    lines.append(FOOTER)
    return "\n".join(lines)
