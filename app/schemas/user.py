from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionUser(BaseModel):
    """Identity stored in the session under `user`: `{"_id": ..., "email": ...}`."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", min_length=1)
    email: Optional[str] = None

    def to_session(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
