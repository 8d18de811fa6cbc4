# app/core/exceptions.py
from __future__ import annotations

"""
Movies & Messages API — Application Exceptions
==============================================
A small, consistent layer on top of FastAPI's `HTTPException` that lets the
services raise typed errors while `app.core.exception_handlers` renders one
JSON shape for every failure:

    {"error": "<message>"}

Taxonomy
--------
- `ValidationError`      missing/malformed input                 → 400
- `AuthenticationError`  no identity in the session               → 500 (kept for client compatibility)
- `NotFoundError`        no document/account matches              → 404 (400 on sign-in)
- `CredentialMismatch`   password check failed                    → 400
- `PersistenceError`     the document store rejected an operation → 500
- `InternalError`        anything unexpected                      → 500

Usage
-----
    raise ValidationError()                              # "missing information"
    raise PersistenceError("Failed to add message")
    raise NotFoundError("User not found", status_code=400)
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "AppException",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "CredentialMismatch",
    "PersistenceError",
    "InternalError",
]


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level exception.

    Attributes
    -----------
    status_code : int
        HTTP status code.
    message : str
        Human-readable error message, rendered as the `error` field.
    code : int
        Optional internal/typed error code. Defaults to `status_code`.
    headers : dict | None
        Optional response headers.
    """

    default_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        status_code = int(status_code or self.default_status)
        message = message or self.default_message
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message: str = message
        self.code: int = int(code or status_code)

    def to_body(self) -> Dict[str, Any]:
        """Return the canonical error body."""
        return {"error": self.message}

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.status_code}): {self.message}"


# ──────────────────────────────────────────────────────────────
# 🧾 Input
# ──────────────────────────────────────────────────────────────
class ValidationError(AppException):
    """Required input is absent or empty."""

    default_status = status.HTTP_400_BAD_REQUEST
    default_message = "missing information"


# ──────────────────────────────────────────────────────────────
# 🔑 Identity
# ──────────────────────────────────────────────────────────────
class AuthenticationError(AppException):
    """The session carries no authenticated user.

    Rendered as 500 because existing clients rely on that status.
    """

    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "You are not authenticated"


class CredentialMismatch(AppException):
    """Account exists but the password does not verify."""

    default_status = status.HTTP_400_BAD_REQUEST
    default_message = "Email or password do not match"


# ──────────────────────────────────────────────────────────────
# 🗄️ Store outcomes
# ──────────────────────────────────────────────────────────────
class NotFoundError(AppException):
    """No document matches the identifier."""

    default_status = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class PersistenceError(AppException):
    """The document store rejected the operation."""

    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to persist document"


class InternalError(AppException):
    """Unexpected failure."""

    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"
