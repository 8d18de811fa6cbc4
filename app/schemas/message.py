from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.body import parse_body


class MessageDraft(BaseModel):
    """Client-supplied message. `user` is accepted in any shape and ignored; the owner comes from the session."""

    name: Optional[Any] = None
    user: Optional[Any] = None


class AddMessageRequest(BaseModel):
    message: Optional[Any] = None

    def draft(self) -> Optional[MessageDraft]:
        """The `message` object, or None when it is absent or not an object."""
        return parse_body(MessageDraft, self.message)


class EditMessageRequest(BaseModel):
    name: Optional[Any] = None


class MessageOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    user: str
