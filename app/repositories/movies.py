from __future__ import annotations

"""Movies collection: `{_id, name, year, genres, description, user}` documents."""

from app.repositories.documents import DocumentRepositoryProtocol, get_collection_repository

MOVIES_COLLECTION = "movies"


def get_movies_repository() -> DocumentRepositoryProtocol:
    """FastAPI dependency for the movies collection."""
    return get_collection_repository(MOVIES_COLLECTION)
