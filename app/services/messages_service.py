# app/services/messages_service.py
from __future__ import annotations

"""
Messages service
================

What this module provides
-------------------------
- **add_message**: validate → require a session identity → insert one
  document owned by that identity.
- **edit_message**: validate → atomic find-and-update of `name` → return the
  post-update document.

Both functions are framework-free: the caller passes the parsed body, the
resolved identity and the repository. Failures are raised as typed
`AppException`s carrying the fixed client-facing messages.

Notes
-----
- `message.user` from the client is ignored; the owner is always the session user.
- Editing does not check ownership (existing clients rely on it).
"""

from typing import Any, Dict, Optional

from loguru import logger

from app.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from app.repositories.documents import DocumentRepositoryProtocol
from app.schemas.body import as_text
from app.schemas.message import AddMessageRequest, EditMessageRequest
from app.schemas.user import SessionUser


async def add_message(
    payload: Optional[AddMessageRequest],
    *,
    identity: Optional[SessionUser],
    repo: DocumentRepositoryProtocol,
) -> Dict[str, Any]:
    """Create a message owned by `identity`.

    Raises
    ------
    ValidationError
        `message` is not an object, or its `name` is not a non-empty string (400).
    AuthenticationError
        No session identity (500).
    PersistenceError
        Store rejected the insert (500).
    """
    # ── [Step 1] Input ───────────────────────────────────────────────────────
    draft = payload.draft() if payload else None
    name = as_text(draft.name) if draft else None
    if name is None:
        raise ValidationError()

    # ── [Step 2] Identity ────────────────────────────────────────────────────
    if identity is None:
        raise AuthenticationError()

    # ── [Step 3] Persist ─────────────────────────────────────────────────────
    try:
        created = await repo.insert_one({"name": name, "user": identity.id})
    except Exception:
        logger.exception("Failed to add message")
        raise PersistenceError("Failed to add message")

    logger.info(f"Message {created['_id']} added by user {identity.id}")
    return created


async def edit_message(
    message_id: Optional[str],
    payload: Optional[EditMessageRequest],
    *,
    repo: DocumentRepositoryProtocol,
) -> Dict[str, Any]:
    """Rename a message and return the updated document.

    Raises
    ------
    ValidationError
        `name` or `message_id` missing/empty (400).
    NotFoundError
        No message with that id (404).
    PersistenceError
        Store rejected the update, including unparseable ids (500).
    """
    name = as_text(payload.name) if payload else None
    if name is None or not message_id:
        raise ValidationError()

    try:
        updated = await repo.find_by_id_and_update(message_id, {"name": name})
    except Exception:
        logger.exception(f"Failed to edit message {message_id}")
        raise PersistenceError("Failed to edit message")

    if updated is None:
        raise NotFoundError("Message not found")

    logger.info(f"Message {message_id} renamed")
    return updated


__all__ = ["add_message", "edit_message"]
