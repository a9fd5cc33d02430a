"""Tracker configuration (the active toggle), stored as {data_dir}/config.json.

get_config() returns defaults merged with stored values. The default for
`active` can be flipped with SPATIAL_TRACKER_ACTIVE; a stored value always
wins over the environment.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from spatial_tracker.models import TrackerConfig

logger = logging.getLogger(__name__)

_data_dir: Path | None = None

_CONFIG_DEFAULTS: dict[str, Any] = {
    "active": True,
}

_FALSY = {"0", "false", "no", "off"}


def init_config(data_dir: Path) -> None:
    global _data_dir
    _data_dir = data_dir
    _data_dir.mkdir(parents=True, exist_ok=True)


def data_dir() -> Path:
    assert _data_dir is not None, "Call init_config() before using config"
    return _data_dir


def _config_path() -> Path:
    return data_dir() / "config.json"


def _defaults() -> dict[str, Any]:
    config = dict(_CONFIG_DEFAULTS)
    env_active = os.getenv("SPATIAL_TRACKER_ACTIVE")
    if env_active is not None:
        config["active"] = env_active.strip().lower() not in _FALSY
    return config


def _read_stored() -> dict[str, Any]:
    path = _config_path()
    if not path.is_file():
        return {}
    stored = json.loads(path.read_text())
    # Migrate: older configs stored the toggle as "isActive"
    if "isActive" in stored:
        legacy = stored.pop("isActive")
        stored.setdefault("active", legacy)
    # Hand-edited files may hold null or a string; the default applies instead
    if "active" in stored and not isinstance(stored["active"], bool):
        logger.warning("Ignoring non-boolean 'active' in %s: %r", path, stored["active"])
        del stored["active"]
    return stored


def get_config() -> TrackerConfig:
    """Read config, returning defaults merged with stored values."""
    config = _defaults()
    stored = _read_stored()
    if "active" in stored:
        config["active"] = stored["active"]
    return TrackerConfig.model_validate(config)


def update_config(fields: dict[str, Any]) -> TrackerConfig:
    """Merge fields into config and persist. Returns full config."""
    stored = _read_stored()
    if "active" in fields:
        stored["active"] = fields["active"]
    config = _defaults()
    config["active"] = stored.get("active", config["active"])
    result = TrackerConfig.model_validate(config)
    _config_path().write_text(json.dumps(stored, indent=2))
    return result
