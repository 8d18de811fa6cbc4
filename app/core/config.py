# app/core/config.py
from __future__ import annotations

"""
# Movies & Messages API — Centralized Configuration (Pydantic v2)

Single `settings` object with strongly-typed, environment-driven config.

## Goals
- Safe defaults for local/dev; explicit where prod needs secrets.
- One place for the document store, session cookie and token knobs, so the
  app factory stays configuration-driven.
- CSV → list helpers for env-provided allow-lists.

## Usage
    from app.core.config import settings
"""

from typing import List, Literal, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()  # harmless in prod; convenient in dev


# ─────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────
def _split_csv(v: str | None) -> list[str]:
    """Split a comma-separated string into a trimmed list (empty-safe)."""
    if not v:
        return []
    return [s.strip() for s in str(v).split(",") if s and s.strip()]


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Security:
        - Explicit secrets for the session cookie and JWT signing.
        - Session cookie is HTTP-only and not `Secure` unless configured.

    Storage:
        - `DOCUMENT_STORE=mongo` (default) talks to MongoDB through motor.
        - `DOCUMENT_STORE=memory` keeps collections in-process (dev/tests).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # don't crash on unknown keys
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "Movies & Messages API"
    VERSION: str = "1.0.0"
    ENV: Literal["development", "staging", "production"] = "development"
    ENABLE_DOCS: bool = True

    # ── Server ────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = Field(3000, ge=1, le=65535)
    RELOAD: bool = False

    # ── Document store (MongoDB) ──────────────────────────────
    DOCUMENT_STORE: Literal["mongo", "memory"] = "mongo"
    MONGODB_URL: str = "mongodb://localhost:27017/epita"
    MONGODB_DB: Optional[str] = None
    MONGODB_TIMEOUT_MS: int = Field(5000, ge=100, le=60_000)

    # ── Session cookie ────────────────────────────────────────
    SESSION_SECRET_KEY: SecretStr = Field(...)
    SESSION_COOKIE_NAME: str = "session"
    SESSION_MAX_AGE_SECONDS: int = Field(14 * 24 * 60 * 60, ge=60)
    SESSION_HTTPS_ONLY: bool = False
    SESSION_SAME_SITE: Literal["lax", "strict", "none"] = "lax"

    # ── Security / JWT ────────────────────────────────────────
    JWT_SECRET_KEY: SecretStr = Field(...)
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60, ge=5, le=24 * 60)
    PASSWORD_BCRYPT_ROUNDS: int = Field(12, ge=4, le=31)

    # ── CORS ──────────────────────────────────────────────────
    CORS_ORIGINS: str = "*"  # CSV; "*" allows any origin
    ALLOW_ORIGINS_REGEX: Optional[str] = None

    # ── Security headers ─────────────────────────────────────
    SECURITY_HEADERS_ENABLED: bool = True
    HSTS_MAX_AGE: int = 15552000  # 180 days
    HSTS_INCLUDE_SUBDOMAINS: bool = True
    CSP_DEFAULT_SRC: str = "'self'"
    REFERRER_POLICY: str = "no-referrer"
    SECURITY_SKIP_PATHS: Optional[str] = "/docs,/redoc,/openapi.json"

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("MONGODB_URL", mode="before")
    @classmethod
    def _normalize_mongodb_url(cls, v: str | None) -> str:
        s = (v or "").strip()
        if not s.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGODB_URL must start with mongodb:// or mongodb+srv://")
        return s

    # ── Derived / convenience properties ─────────────────────
    @property
    def mongodb_database(self) -> str:
        """
        Database name: explicit `MONGODB_DB`, else the path of `MONGODB_URL`,
        else `epita`.
        """
        if self.MONGODB_DB:
            return self.MONGODB_DB
        path = urlparse(self.MONGODB_URL).path.lstrip("/")
        return path.split("/")[0] or "epita"

    @property
    def cors_origins_list(self) -> List[str]:
        """List form of `CORS_ORIGINS`."""
        return _split_csv(self.CORS_ORIGINS)

    @property
    def cors_allows_any_origin(self) -> bool:
        return "*" in self.cors_origins_list

    @property
    def security_skip_paths_list(self) -> List[str]:
        """List form of `SECURITY_SKIP_PATHS` for middleware checks."""
        return _split_csv(self.SECURITY_SKIP_PATHS or "")


# Singleton instance
settings = Settings()
