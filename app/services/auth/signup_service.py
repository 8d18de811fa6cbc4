# app/services/auth/signup_service.py
from __future__ import annotations

"""
Sign-up service
===============
Creates an account in the users collection with a bcrypt password hash.

- missing username/email/password → 400 "Please enter all fields"
- username or e-mail already used → 400 "User already exists"
- anything unexpected             → 500 "Server error"
"""

from typing import Any, Dict, Optional

from loguru import logger

from app.core.exceptions import AppException, InternalError, ValidationError
from app.core.security import get_password_hash
from app.repositories.documents import DocumentRepositoryProtocol
from app.repositories.users import normalize_email
from app.schemas.auth import SignupPayload


async def register(payload: Optional[SignupPayload], *, repo: DocumentRepositoryProtocol) -> Dict[str, Any]:
    """Create a user and return its public fields (`_id`, `username`, `email`)."""
    username = (payload.username or "").strip() if payload else ""
    email = normalize_email(payload.email if payload else None)
    password = payload.password if payload else None
    if not username or not email or not password:
        raise ValidationError("Please enter all fields")

    try:
        if await repo.find_one({"username": username}) or await repo.find_one({"email": email}):
            raise ValidationError("User already exists")

        created = await repo.insert_one(
            {"username": username, "email": email, "password": get_password_hash(password)}
        )
    except AppException:
        raise
    except Exception:
        logger.exception("Sign-up failed")
        raise InternalError("Server error")

    logger.info(f"User {created['_id']} registered")
    return {"_id": created["_id"], "username": created["username"], "email": created["email"]}


__all__ = ["register"]
