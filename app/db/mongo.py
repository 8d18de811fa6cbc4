# app/db/mongo.py
from __future__ import annotations

"""
Movies & Messages API — MongoDB Client & Startup Connect

- One process-wide motor client, created lazily so importing this module
  never touches the network.
- `start_background_connect()` is fire-and-forget: it pings the server, logs
  success or failure, and never blocks or crashes startup.
- `mongo_healthcheck()` backs `/readyz`.
"""

import asyncio
from typing import Optional

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from app.core.config import settings

_client: Optional[AsyncIOMotorClient] = None
_connect_task: Optional[asyncio.Task] = None


def get_client() -> AsyncIOMotorClient:
    """Return the shared motor client (created on first use)."""
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            settings.MONGODB_URL,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            tz_aware=True,
        )
    return _client


def get_database() -> AsyncIOMotorDatabase:
    return get_client()[settings.mongodb_database]


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Unique logins for users; owner lookups for messages and movies."""
    await db["users"].create_index([("username", ASCENDING)], unique=True)
    await db["users"].create_index([("email", ASCENDING)], unique=True)
    await db["messages"].create_index([("user", ASCENDING)])
    await db["movies"].create_index([("user", ASCENDING)])


async def connect() -> bool:
    """Ping the server and ensure indexes. Logs the outcome; never raises."""
    try:
        db = get_database()
        await db.command("ping")
        logger.info("MongoDB Connected")
    except Exception as e:
        logger.error(f"Error connecting to DB {e}")
        return False

    try:
        await ensure_indexes(db)
    except Exception as e:
        logger.warning(f"Could not ensure MongoDB indexes: {e}")
    return True


def start_background_connect() -> asyncio.Task:
    """Schedule `connect()` on the running loop without awaiting it."""
    global _connect_task
    _connect_task = asyncio.create_task(connect(), name="mongo-connect")
    return _connect_task


async def mongo_healthcheck(timeout: float = 2.0) -> bool:
    """Quick ping used by readiness probes."""
    try:
        await asyncio.wait_for(get_database().command("ping"), timeout=timeout)
        return True
    except Exception:
        logger.exception("MongoDB healthcheck failed")
        return False


async def close() -> None:
    """Cancel a pending connect and close the client (best-effort)."""
    global _client, _connect_task
    if _connect_task is not None and not _connect_task.done():
        _connect_task.cancel()
    _connect_task = None
    if _client is not None:
        _client.close()
        _client = None
        logger.info("🛑 MongoDB connection closed")


__all__ = [
    "get_client",
    "get_database",
    "ensure_indexes",
    "connect",
    "start_background_connect",
    "mongo_healthcheck",
    "close",
]
