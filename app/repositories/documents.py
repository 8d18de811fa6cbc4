from __future__ import annotations

"""Document store repositories.

Provides the interface the services depend on, a MongoDB implementation
(motor) and a simple in-memory implementation used for local runs and tests.

Documents are plain dicts. Identifiers are BSON ObjectIds in the store and
24-hex strings everywhere else; an identifier that is not a valid ObjectId is
a store-level error (`bson.errors.InvalidId`), exactly like a driver rejection.
"""

import copy
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from app.core.config import settings


class DocumentRepositoryProtocol:
    async def insert_one(self, document: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    async def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    async def find_one(self, match: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    async def find_many(self, match: Optional[Dict[str, Any]] = None, *, limit: int = 100) -> List[Dict[str, Any]]:
        raise NotImplementedError

    async def find_by_id_and_update(self, document_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Atomically `$set` `changes` and return the post-update document (None on no match)."""
        raise NotImplementedError

    async def delete_one(self, document_id: str, match: Optional[Dict[str, Any]] = None) -> bool:
        raise NotImplementedError


# Helpers
def to_object_id(document_id: Any) -> ObjectId:
    """Parse an identifier; raises `bson.errors.InvalidId` when malformed."""
    if isinstance(document_id, ObjectId):
        return document_id
    return ObjectId(str(document_id))


def serialize(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Copy a stored document with ObjectIds rendered as strings."""
    if document is None:
        return None
    return {k: (str(v) if isinstance(v, ObjectId) else v) for k, v in document.items()}


class MongoDocumentRepository(DocumentRepositoryProtocol):
    """Repository over one motor collection."""

    def __init__(self, collection) -> None:
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    async def insert_one(self, document: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(document)
        result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize(doc)

    async def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        return serialize(await self._collection.find_one({"_id": to_object_id(document_id)}))

    async def find_one(self, match: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return serialize(await self._collection.find_one(match))

    async def find_many(self, match: Optional[Dict[str, Any]] = None, *, limit: int = 100) -> List[Dict[str, Any]]:
        cursor = self._collection.find(match or {}).sort("_id", 1).limit(limit)
        return [serialize(doc) for doc in await cursor.to_list(length=limit)]

    async def find_by_id_and_update(self, document_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = await self._collection.find_one_and_update(
            {"_id": to_object_id(document_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return serialize(doc)

    async def delete_one(self, document_id: str, match: Optional[Dict[str, Any]] = None) -> bool:
        query = {**(match or {}), "_id": to_object_id(document_id)}
        result = await self._collection.delete_one(query)
        return result.deleted_count > 0


class MemoryDocumentRepository(DocumentRepositoryProtocol):
    """
    In-process collection with the same semantics as the Mongo repository
    (equality matching only). Single event loop, so every method body runs
    without interleaving.
    """

    def __init__(self, name: str = "memory") -> None:
        self.name = name
        self._docs: Dict[ObjectId, Dict[str, Any]] = {}

    def _matches(self, doc: Dict[str, Any], match: Optional[Dict[str, Any]]) -> bool:
        for key, expected in (match or {}).items():
            if key == "_id":
                expected = to_object_id(expected)
            if doc.get(key) != expected:
                return False
        return True

    async def insert_one(self, document: Dict[str, Any]) -> Dict[str, Any]:
        doc = copy.deepcopy(dict(document))
        doc["_id"] = to_object_id(doc["_id"]) if doc.get("_id") else ObjectId()
        if doc["_id"] in self._docs:
            raise ValueError(f"duplicate _id {doc['_id']}")
        self._docs[doc["_id"]] = doc
        return serialize(copy.deepcopy(doc))

    async def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        doc = self._docs.get(to_object_id(document_id))
        return serialize(copy.deepcopy(doc))

    async def find_one(self, match: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self._docs.values():
            if self._matches(doc, match):
                return serialize(copy.deepcopy(doc))
        return None

    async def find_many(self, match: Optional[Dict[str, Any]] = None, *, limit: int = 100) -> List[Dict[str, Any]]:
        docs = [d for d in self._docs.values() if self._matches(d, match)]
        docs.sort(key=lambda d: d["_id"])
        return [serialize(copy.deepcopy(d)) for d in docs[:limit]]

    async def find_by_id_and_update(self, document_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._docs.get(to_object_id(document_id))
        if doc is None:
            return None
        doc.update(copy.deepcopy(changes))
        return serialize(copy.deepcopy(doc))

    async def delete_one(self, document_id: str, match: Optional[Dict[str, Any]] = None) -> bool:
        oid = to_object_id(document_id)
        doc = self._docs.get(oid)
        if doc is None or not self._matches(doc, match):
            return False
        del self._docs[oid]
        return True

    def clear(self) -> None:
        self._docs.clear()


# Process-wide in-memory collections (DOCUMENT_STORE=memory)
_memory_collections: Dict[str, MemoryDocumentRepository] = {}


def get_memory_collection(name: str) -> MemoryDocumentRepository:
    repo = _memory_collections.get(name)
    if repo is None:
        repo = _memory_collections[name] = MemoryDocumentRepository(name)
    return repo


def get_collection_repository(name: str) -> DocumentRepositoryProtocol:
    """
    Repository for a named collection, backed by the configured store
    (`DOCUMENT_STORE=mongo|memory`).
    """
    if settings.DOCUMENT_STORE == "memory":
        return get_memory_collection(name)

    from app.db.mongo import get_database

    return MongoDocumentRepository(get_database()[name])
