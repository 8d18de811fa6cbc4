# app/api/routers/auth.py
from __future__ import annotations

"""
Authentication API
==================

Endpoints
---------
POST /auth/login
    Username (or e-mail) + password sign-in. Returns `{token}` and stores the
    identity in the session cookie.

POST /auth/register
    Create an account. 201 with `{_id, username, email}`.

POST /auth/logout
    Clear the session. Always 200.

Notes
-----
- Token-issuing responses are marked **no-store**.
- Logic is delegated to `app.services.auth.*`.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status

from app.dependencies.session import start_session
from app.repositories.documents import DocumentRepositoryProtocol
from app.repositories.users import get_users_repository
from app.schemas.auth import LoginRequest, LogoutResponse, SignupPayload, TokenResponse, UserOut
from app.security_headers import set_sensitive_cache
from app.services.auth.login_service import sign_in
from app.services.auth.logout_service import sign_out
from app.services.auth.signup_service import register

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse, summary="Username + password login")
async def login(
    request: Request,
    response: Response,
    payload: Optional[LoginRequest] = Body(None),
    repo: DocumentRepositoryProtocol = Depends(get_users_repository),
) -> TokenResponse:
    set_sensitive_cache(response)
    result = await sign_in(payload, repo=repo)
    start_session(request, result.user)
    return TokenResponse(token=result.token)


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def signup(
    payload: Optional[SignupPayload] = Body(None),
    repo: DocumentRepositoryProtocol = Depends(get_users_repository),
):
    return await register(payload, repo=repo)


@router.post("/logout", response_model=LogoutResponse, summary="Clear the session")
async def logout(request: Request) -> LogoutResponse:
    sign_out(request)
    return LogoutResponse()


__all__ = ["router", "login", "signup", "logout"]
