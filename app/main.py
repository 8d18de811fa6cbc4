# app/main.py
from __future__ import annotations

"""
# Movies & Messages API — Application Entrypoint (FastAPI)

ASGI application factory and lifecycle for the movies / messages backend.

## Design Goals
- Deterministic, testable **app factory** (`create_app`) with explicit lifespan.
- Explicit **middleware order** (outermost first):
  1) request id → 2) access log → 3) security headers →
  4) CORS → 5) signed-cookie session.
- Centralized exception handling, every error rendered as `{"error": "..."}`.
- The document store connects in the background; the server starts listening
  even when MongoDB is unreachable.

## Probes
- `/healthz` — liveness (process up).
- `/readyz` — readiness (MongoDB ping with a short timeout).
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import JSONResponse

# -- Logging bootstrap (Loguru + stdlib intercept) ----------------------------
from app.core.logger import install_uncaught_exception_hooks

from app.api.routers import router as api_router
from app.core.config import settings
from app.core.exception_handlers import (
    app_exception_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.core.exceptions import AppException
from app.db import mongo
from app.middleware.access_log import AccessLogMiddleware
from app.middleware.request_id import RequestIDMiddleware
from app.security_headers import configure_cors, install_security


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifecycle manager.

    Startup:
        - Route uncaught errors (threads, loop callbacks) to the logger.
        - Start the MongoDB connection attempt without awaiting it.

    Shutdown:
        - Close the MongoDB client (if one was created).
    """
    install_uncaught_exception_hooks(asyncio.get_running_loop())
    logger.info(f"✅ {settings.PROJECT_NAME} starting up (env={settings.ENV}, store={settings.DOCUMENT_STORE})")

    if settings.DOCUMENT_STORE == "mongo":
        app.state.mongo_connect = mongo.start_background_connect()

    try:
        yield
    finally:
        if settings.DOCUMENT_STORE == "mongo":
            await mongo.close()
        logger.info(f"🛑 {settings.PROJECT_NAME} shutting down")


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app() -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    Returns:
        FastAPI: fully wired application with middleware, exception handlers,
        routers, and health/readiness endpoints.
    """
    docs_url = "/docs" if settings.ENABLE_DOCS else None
    redoc_url = "/redoc" if settings.ENABLE_DOCS else None
    openapi_url = "/openapi.json" if settings.ENABLE_DOCS else None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
        lifespan=lifespan,
    )

    # ── Middlewares (added innermost first) ─────────────────────────────────
    # 5) Signed-cookie session; identity lives under `user`
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET_KEY.get_secret_value(),
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        same_site=settings.SESSION_SAME_SITE,
        https_only=settings.SESSION_HTTPS_ONLY,
    )

    # 4) CORS (any origin by default, allow-list via env)
    configure_cors(app)

    # 3) Security headers
    install_security(app)

    # 2) Access log at the HTTP level
    app.add_middleware(AccessLogMiddleware)

    # 1) Correlation ID
    app.add_middleware(RequestIDMiddleware)

    # ── Exception handlers ──────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)  # type: ignore[arg-type]

    # ── Routers ─────────────────────────────────────────────────────────────
    app.include_router(api_router)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, bool]:
        """Liveness probe. No external checks."""
        return {"ok": True}

    @app.get("/readyz", tags=["meta"])
    async def readyz() -> dict[str, object]:
        """
        Readiness probe.

        Returns:
            dict with the per-dependency boolean and the aggregated `ready`
            flag. The in-memory store is always ready.
        """
        if settings.DOCUMENT_STORE == "memory":
            db_ok = True
        else:
            db_ok = await mongo.mongo_healthcheck()
        return {"ready": db_ok, "checks": {"db": db_ok}}

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Minimal root that points to docs (when enabled)."""
        body = {
            "name": settings.PROJECT_NAME,
            "docs": app.docs_url or "",
            "version": settings.VERSION,
        }
        return JSONResponse(body)

    return app


# ─────────────────────────────────────────────────────────────────────────────
# 🚀 Module-level ASGI app for Uvicorn
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()


def run() -> None:
    """Console entrypoint: serve `app.main:app` on the configured port."""
    import uvicorn

    logger.info(f"Listening on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        server_header=False,
        log_config=None,
    )


__all__ = ["create_app", "app", "run"]


if __name__ == "__main__":
    run()
