# tests/conftest.py
"""
Global test bootstrap
- Pins a test environment BEFORE the app (and its settings singleton) is imported
- Uses the in-memory document store so no MongoDB is needed
- Pulls in the shared fixtures (app, clients, repositories, users)
"""

from __future__ import annotations

import os

import pytest

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (set before importing app modules)
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")
os.environ["DOCUMENT_STORE"] = "memory"
os.environ["LOG_TO_FILE"] = "0"
os.environ.setdefault("PASSWORD_BCRYPT_ROUNDS", "4")


@pytest.fixture(scope="session", autouse=True)
def anyio_backend():
    return "asyncio"


# ──────────────────────────────────────────────────────────────────────────────
# 📦 Pull in the rest of the fixtures
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.repositories import *  # noqa: F401,F403,E402
from tests.fixtures.app import *           # noqa: F401,F403,E402
from tests.fixtures.users import *         # noqa: F401,F403,E402
