# tests/fixtures/repositories.py

"""
🗄️ Repository fixtures:
- Fresh in-memory collections per test
- A repository whose every call fails, to exercise store-error paths
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from app.repositories.documents import DocumentRepositoryProtocol, MemoryDocumentRepository


class FailingRepository(DocumentRepositoryProtocol):
    """Every operation raises, like a store that is down or rejects the query."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or RuntimeError("store unavailable")
        self.calls: List[str] = []

    def _fail(self, op: str):
        self.calls.append(op)
        raise self.exc

    async def insert_one(self, document: Dict[str, Any]) -> Dict[str, Any]:
        self._fail("insert_one")

    async def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        self._fail("find_by_id")

    async def find_one(self, match: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._fail("find_one")

    async def find_many(self, match: Optional[Dict[str, Any]] = None, *, limit: int = 100) -> List[Dict[str, Any]]:
        self._fail("find_many")

    async def find_by_id_and_update(self, document_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._fail("find_by_id_and_update")

    async def delete_one(self, document_id: str, match: Optional[Dict[str, Any]] = None) -> bool:
        self._fail("delete_one")


@pytest.fixture()
def users_repo() -> MemoryDocumentRepository:
    return MemoryDocumentRepository("users")


@pytest.fixture()
def messages_repo() -> MemoryDocumentRepository:
    return MemoryDocumentRepository("messages")


@pytest.fixture()
def movies_repo() -> MemoryDocumentRepository:
    return MemoryDocumentRepository("movies")


@pytest.fixture()
def failing_repo() -> FailingRepository:
    return FailingRepository()
