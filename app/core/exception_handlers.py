from __future__ import annotations

"""
JSON error handlers.

FastAPI integrates these via app/main.py. Every failure is rendered as

    {"error": "<message>"}

with the status carried by the exception (500 for anything unexpected).
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException


def _error(message: str, status_code: int, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _log(request: Request, status_code: int, message: str) -> None:
    line = f"{request.method} {request.url.path} -> {status_code}: {message}"
    if status_code >= 500:
        logger.error(line)
    else:
        logger.warning(line)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    _log(request, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    _log(request, exc.status_code, detail)
    return _error(detail, exc.status_code, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Bodies are permissive; this only fires for unparseable or mistyped payloads.
    _log(request, status.HTTP_400_BAD_REQUEST, f"invalid body {exc.errors()!r}")
    return _error("Invalid request body", status.HTTP_400_BAD_REQUEST)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return _error("Server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


__all__ = [
    "app_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "global_exception_handler",
]
