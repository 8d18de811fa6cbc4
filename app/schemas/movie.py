from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.body import parse_body


class MovieDraft(BaseModel):
    name: Optional[Any] = None
    year: Optional[int] = Field(None, ge=1870, le=3000)
    genres: Optional[List[str]] = None
    description: Optional[str] = None


class AddMovieRequest(BaseModel):
    movie: Optional[Any] = None

    def draft(self) -> Optional[MovieDraft]:
        """The `movie` object, or None when it is absent or not an object."""
        return parse_body(MovieDraft, self.movie)


class EditMovieRequest(MovieDraft):
    """Partial update; at least one field must be present."""


class MovieOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    year: Optional[int] = None
    genres: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    user: str


class DeleteResult(BaseModel):
    message: str
