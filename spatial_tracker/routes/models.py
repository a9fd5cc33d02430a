"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel

from spatial_tracker.models import PersistedState


class CreateSession(BaseModel):
    state: PersistedState | None = None


class TurnBody(BaseModel):
    content: str


class UpdateSettings(BaseModel):
    active: bool | None = None
