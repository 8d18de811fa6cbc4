"""
API Router Aggregator
=====================

Exports the **combined `router`** and each sub-router so callers can mount
them as needed.

Layout
------
- `/auth`      sign-in, sign-up, sign-out
- `/messages`  add / edit messages
- `/movies`    movie CRUD

Quick usage
-----------
    from app.api.routers import router
    app.include_router(router)
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .messages import router as messages_router
from .movies import router as movies_router


def build_router() -> APIRouter:
    """Compose the API surface into a single `APIRouter`."""
    r = APIRouter()
    r.include_router(movies_router)
    r.include_router(auth_router)
    r.include_router(messages_router)
    return r


router = build_router()


__all__ = [
    "router",
    "build_router",
    "auth_router",
    "messages_router",
    "movies_router",
]
