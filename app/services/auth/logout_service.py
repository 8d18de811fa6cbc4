from __future__ import annotations

"""
Logout service
==============
Clears the caller's session. Idempotent: signing out without a session
still succeeds.
"""

from fastapi import Request
from loguru import logger

from app.dependencies.session import end_session, get_session_user


def sign_out(request: Request) -> None:
    identity = get_session_user(request)
    end_session(request)
    if identity is not None:
        logger.info(f"User {identity.id} signed out")


__all__ = ["sign_out"]
