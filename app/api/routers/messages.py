# app/api/routers/messages.py
from __future__ import annotations

"""
Messages API
============

Endpoints
---------
POST /messages/add/message
    Create a message owned by the signed-in user. 201 with the document.

PUT /messages/edit/{messageId}
    Rename a message. 200 with the updated document.

Logic lives in `app.services.messages_service`; this module only binds HTTP
inputs (body, path, session identity, repository) to it.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Path, status

from app.dependencies.session import get_session_user
from app.repositories.documents import DocumentRepositoryProtocol
from app.repositories.messages import get_messages_repository
from app.schemas.body import parse_body
from app.schemas.message import AddMessageRequest, EditMessageRequest, MessageOut
from app.schemas.user import SessionUser
from app.services import messages_service

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post(
    "/add/message",
    response_model=MessageOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add a message",
)
async def add_message(
    body: Any = Body(None),
    identity: Optional[SessionUser] = Depends(get_session_user),
    repo: DocumentRepositoryProtocol = Depends(get_messages_repository),
):
    payload = parse_body(AddMessageRequest, body)
    return await messages_service.add_message(payload, identity=identity, repo=repo)


@router.put(
    "/edit/{messageId}",
    response_model=MessageOut,
    status_code=status.HTTP_200_OK,
    summary="Rename a message",
)
async def edit_message(
    message_id: str = Path(..., alias="messageId"),
    body: Any = Body(None),
    repo: DocumentRepositoryProtocol = Depends(get_messages_repository),
):
    payload = parse_body(EditMessageRequest, body)
    return await messages_service.edit_message(message_id, payload, repo=repo)


__all__ = ["router", "add_message", "edit_message"]
