from __future__ import annotations

"""Messages collection: `{_id, name, user}` documents."""

from app.repositories.documents import DocumentRepositoryProtocol, get_collection_repository

MESSAGES_COLLECTION = "messages"


def get_messages_repository() -> DocumentRepositoryProtocol:
    """FastAPI dependency for the messages collection."""
    return get_collection_repository(MESSAGES_COLLECTION)
