from __future__ import annotations

"""
Session identity helpers
------------------------
The session cookie (Starlette `SessionMiddleware`) stores the signed-in user
under `user` as `{"_id": ..., "email": ...}`. Routes never hand the raw
session to services: they resolve a `SessionUser` (or None) here and pass it
explicitly.

Exports
- get_session_user: FastAPI dependency → Optional[SessionUser]
- start_session(request, user): write the identity after sign-in
- end_session(request): clear everything on sign-out
"""

from typing import Optional

from fastapi import Request
from jose import JWTError
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from app.core.security import decode_access_token
from app.schemas.user import SessionUser

SESSION_USER_KEY = "user"


def _bearer_token(request: Request) -> Optional[str]:
    auth = request.headers.get("Authorization") or ""
    scheme, _, token = auth.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def get_session_user(request: Request) -> Optional[SessionUser]:
    """Identity of the caller, or None when unauthenticated.

    The session cookie is authoritative; a bearer token issued by sign-in is
    accepted when no session identity is present.
    """
    raw = request.session.get(SESSION_USER_KEY) if "session" in request.scope else None
    if isinstance(raw, dict) and raw.get("_id"):
        try:
            return SessionUser.model_validate(raw)
        except PydanticValidationError:
            logger.warning("Discarding malformed session identity")

    token = _bearer_token(request)
    if token:
        try:
            claims = decode_access_token(token)
            return SessionUser(_id=claims["sub"], email=claims.get("email"))
        except (JWTError, KeyError, PydanticValidationError):
            logger.info("Rejected bearer token")
    return None


def start_session(request: Request, user: SessionUser) -> None:
    """Replace whatever the session held with `user`."""
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.to_session()


def end_session(request: Request) -> None:
    request.session.clear()


__all__ = ["SESSION_USER_KEY", "get_session_user", "start_session", "end_session"]
