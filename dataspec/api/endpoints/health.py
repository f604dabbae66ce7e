from __future__ import annotations

from fastapi import APIRouter

from dataspec import __version__
from dataspec.core.config import get_settings
from dataspec.core.observability.metrics import inc_named

router = APIRouter()


@router.get("/health/live")
async def live():
    inc_named("health_live")
    return {"status": "ok"}


@router.get("/api/v1/health/live")
def liveness():
    inc_named("health_live")
    return {"status": "alive", "version": __version__, "env": get_settings().env}
