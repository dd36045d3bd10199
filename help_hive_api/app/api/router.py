"""
Top-level API router.

Aggregates the endpoint routers; ``main`` mounts the result under
``/api``.
"""

from fastapi import APIRouter

from .endpoints import auth, events, health

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(events.router, prefix="/events", tags=["events"])
