# app/services/movies_service.py
from __future__ import annotations

"""
Movies service
==============
Same request pattern as the messages service: validate input, require a
session identity for writes that create or remove documents, perform one
document operation, map the outcome to a typed error.

| Operation     | Failure messages                                                          |
|---------------|---------------------------------------------------------------------------|
| list_movies   | "Failed to fetch movies"                                                  |
| get_movie     | "Movie not found", "Failed to fetch movie"                                |
| add_movie     | "missing information", "You are not authenticated", "Failed to add movie" |
| edit_movie    | "missing information", "Movie not found", "Failed to edit movie"          |
| delete_movie  | "You are not authenticated", "Movie not found", "Failed to delete movie"  |
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from app.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from app.repositories.documents import DocumentRepositoryProtocol
from app.schemas.body import as_text
from app.schemas.movie import AddMovieRequest, EditMovieRequest
from app.schemas.user import SessionUser

EDITABLE_FIELDS = ("name", "year", "genres", "description")


async def list_movies(
    *,
    repo: DocumentRepositoryProtocol,
    user: Optional[str] = None,
    limit: int = 100,
) -> List[Dict[str, Any]]:
    match = {"user": user} if user else None
    try:
        return await repo.find_many(match, limit=limit)
    except Exception:
        logger.exception("Failed to fetch movies")
        raise PersistenceError("Failed to fetch movies")


async def get_movie(movie_id: str, *, repo: DocumentRepositoryProtocol) -> Dict[str, Any]:
    try:
        movie = await repo.find_by_id(movie_id)
    except Exception:
        logger.exception(f"Failed to fetch movie {movie_id}")
        raise PersistenceError("Failed to fetch movie")
    if movie is None:
        raise NotFoundError("Movie not found")
    return movie


async def add_movie(
    payload: Optional[AddMovieRequest],
    *,
    identity: Optional[SessionUser],
    repo: DocumentRepositoryProtocol,
) -> Dict[str, Any]:
    draft = payload.draft() if payload else None
    name = as_text(draft.name) if draft else None
    if name is None:
        raise ValidationError()

    if identity is None:
        raise AuthenticationError()

    document = {
        "name": name,
        "year": draft.year,
        "genres": list(draft.genres or []),
        "description": draft.description,
        "user": identity.id,
    }
    try:
        created = await repo.insert_one(document)
    except Exception:
        logger.exception("Failed to add movie")
        raise PersistenceError("Failed to add movie")

    logger.info(f"Movie {created['_id']} added by user {identity.id}")
    return created


async def edit_movie(
    movie_id: Optional[str],
    payload: Optional[EditMovieRequest],
    *,
    repo: DocumentRepositoryProtocol,
) -> Dict[str, Any]:
    changes = payload.model_dump(include=set(EDITABLE_FIELDS), exclude_none=True) if payload else {}
    if "name" in changes and as_text(changes["name"]) is None:
        raise ValidationError()
    if not changes or not movie_id:
        raise ValidationError()

    try:
        updated = await repo.find_by_id_and_update(movie_id, changes)
    except Exception:
        logger.exception(f"Failed to edit movie {movie_id}")
        raise PersistenceError("Failed to edit movie")

    if updated is None:
        raise NotFoundError("Movie not found")
    return updated


async def delete_movie(
    movie_id: str,
    *,
    identity: Optional[SessionUser],
    repo: DocumentRepositoryProtocol,
) -> None:
    """Delete a movie owned by `identity`; other owners' movies read as not found."""
    if identity is None:
        raise AuthenticationError()

    try:
        deleted = await repo.delete_one(movie_id, {"user": identity.id})
    except Exception:
        logger.exception(f"Failed to delete movie {movie_id}")
        raise PersistenceError("Failed to delete movie")

    if not deleted:
        raise NotFoundError("Movie not found")
    logger.info(f"Movie {movie_id} deleted by user {identity.id}")


__all__ = ["list_movies", "get_movie", "add_movie", "edit_movie", "delete_movie"]
