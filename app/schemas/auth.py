# app/schemas/auth.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ──────────────── Login ────────────────
class LoginRequest(BaseModel):
    """Fields are optional so the service owns the missing-field error."""

    username: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str


# ──────────────── Sign Up ────────────────
class SignupPayload(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    username: str
    email: str


# ──────────────── Logout ────────────────
class LogoutResponse(BaseModel):
    message: str = "Logged out"
