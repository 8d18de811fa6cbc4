from __future__ import annotations

"""Users collection: `{_id, username, email, password}` documents.

`password` holds a bcrypt hash and never leaves the service layer.
"""

from typing import Any, Dict, Optional

from app.repositories.documents import DocumentRepositoryProtocol, get_collection_repository

USERS_COLLECTION = "users"


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


async def find_by_login(repo: DocumentRepositoryProtocol, identifier: str) -> Optional[Dict[str, Any]]:
    """Look a user up by username, then by e-mail (case-insensitive)."""
    user = await repo.find_one({"username": identifier})
    if user is None and "@" in identifier:
        user = await repo.find_one({"email": normalize_email(identifier)})
    return user


def get_users_repository() -> DocumentRepositoryProtocol:
    """FastAPI dependency for the users collection."""
    return get_collection_repository(USERS_COLLECTION)
