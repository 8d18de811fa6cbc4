# app/services/auth/login_service.py
from __future__ import annotations

"""
Login service
=============

What this module provides
-------------------------
- **Username (or e-mail) + password sign-in** against the users collection.
- A signed access token for the client and the identity the router stores
  in the session cookie.

Error contract
--------------
- missing username/password → 400 "Please enter all fields"
- unknown account           → 400 "User not found"
- wrong password            → 400 "Email or password do not match"
- anything unexpected       → 500 "Server error"
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from app.core.exceptions import (
    AppException,
    CredentialMismatch,
    InternalError,
    NotFoundError,
    ValidationError,
)
from app.core.security import create_access_token, verify_password
from app.repositories.documents import DocumentRepositoryProtocol
from app.repositories.users import find_by_login
from app.schemas.auth import LoginRequest
from app.schemas.user import SessionUser


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: SessionUser


async def sign_in(payload: Optional[LoginRequest], *, repo: DocumentRepositoryProtocol) -> LoginResult:
    """Authenticate a user and mint an access token.

    The caller is responsible for writing `result.user` into the session.
    """
    username = (payload.username or "").strip() if payload else ""
    password = payload.password if payload else None
    if not username or not password:
        raise ValidationError("Please enter all fields")

    try:
        # ── [Step 1] Lookup ──────────────────────────────────────────────────
        user = await find_by_login(repo, username)
        if user is None:
            raise NotFoundError("User not found", status_code=400)

        # ── [Step 2] Password (timing-safe) ──────────────────────────────────
        if not verify_password(password, user.get("password")):
            raise CredentialMismatch()

        # ── [Step 3] Token + session identity ────────────────────────────────
        identity = SessionUser(_id=user["_id"], email=user.get("email"))
        token = create_access_token(identity.id, email=identity.email)
    except AppException as exc:
        logger.info(f"Sign-in refused for {username!r}: {exc.message}")
        raise
    except Exception:
        logger.exception("Sign-in failed")
        raise InternalError("Server error")

    logger.info(f"User {identity.id} signed in")
    return LoginResult(token=token, user=identity)


__all__ = ["LoginResult", "sign_in"]
