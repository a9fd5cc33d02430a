"""Health check and settings endpoints."""

from fastapi import APIRouter

from spatial_tracker import config

from .models import UpdateSettings

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Get the tracker settings."""
    return config.get_config()


@router.patch("/settings")
async def update_settings(body: UpdateSettings):
    """Update tracker settings (partial merge)."""
    return config.update_config(body.model_dump(exclude_none=True))
