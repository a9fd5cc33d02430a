"""FastAPI API endpoints under /api.

Endpoint groups: settings (health, toggle) and sessions. Each session maps
the host's stage lifecycle onto HTTP:

  POST /sessions                     load     (fresh or saved state)
  PUT  /sessions/{id}/state          restore  (history navigation)
  POST /sessions/{id}/before-turn    instruction for the pending prompt
  POST /sessions/{id}/after-turn     merge reply, return cleaned message
"""

from fastapi import APIRouter

from .sessions import router as sessions_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(sessions_router)
