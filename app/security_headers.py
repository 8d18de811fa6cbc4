# app/security_headers.py
from __future__ import annotations

"""
# Security Headers & CORS

Response-hardening headers and CORS utilities for FastAPI/Starlette, with
the same defaults as the common Node `helmet()` + `cors()` pairing.

## What you get
- **Headers**: CSP, HSTS, COOP/CORP, Origin-Agent-Cluster, Referrer-Policy,
  X-Content-Type-Options, X-DNS-Prefetch-Control, X-Download-Options,
  X-Frame-Options, X-Permitted-Cross-Domain-Policies, X-XSS-Protection.
- **Skip list**: configurable path prefixes (docs by default) to avoid CSP noise.
- **Cache helper**: `set_sensitive_cache()` for token-issuing routes.
- **CORS installer**: any origin by default, allow-list via `CORS_ORIGINS`.

## Quick start
    from app.security_headers import install_security, configure_cors

    app = FastAPI()
    install_security(app)
    configure_cors(app)
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from fastapi import Response
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.config import settings


# ─────────────────────────────────────────────────────────────
# ⚙️ Configuration
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SecurityHeadersConfig:
    """Runtime configuration for security headers (settings-driven)."""

    hsts_max_age: int = 15552000
    hsts_include_subdomains: bool = True
    csp_default_src: str = "'self'"
    referrer_policy: str = "no-referrer"
    skip_paths: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_settings(cls) -> "SecurityHeadersConfig":
        return cls(
            hsts_max_age=settings.HSTS_MAX_AGE,
            hsts_include_subdomains=settings.HSTS_INCLUDE_SUBDOMAINS,
            csp_default_src=settings.CSP_DEFAULT_SRC,
            referrer_policy=settings.REFERRER_POLICY,
            skip_paths=tuple(settings.security_skip_paths_list),
        )

    def csp(self) -> str:
        return "; ".join(
            [
                f"default-src {self.csp_default_src}",
                "base-uri 'self'",
                "font-src 'self' https: data:",
                "form-action 'self'",
                "frame-ancestors 'self'",
                "img-src 'self' data:",
                "object-src 'none'",
                "script-src 'self'",
                "script-src-attr 'none'",
                "style-src 'self' https: 'unsafe-inline'",
                "upgrade-insecure-requests",
            ]
        )

    def headers(self) -> List[Tuple[str, str]]:
        hsts = f"max-age={self.hsts_max_age}"
        if self.hsts_include_subdomains:
            hsts += "; includeSubDomains"
        return [
            ("Content-Security-Policy", self.csp()),
            ("Cross-Origin-Opener-Policy", "same-origin"),
            ("Cross-Origin-Resource-Policy", "same-origin"),
            ("Origin-Agent-Cluster", "?1"),
            ("Referrer-Policy", self.referrer_policy),
            ("Strict-Transport-Security", hsts),
            ("X-Content-Type-Options", "nosniff"),
            ("X-DNS-Prefetch-Control", "off"),
            ("X-Download-Options", "noopen"),
            ("X-Frame-Options", "SAMEORIGIN"),
            ("X-Permitted-Cross-Domain-Policies", "none"),
            ("X-XSS-Protection", "0"),
        ]


# ─────────────────────────────────────────────────────────────
# 🧩 Middleware
# ─────────────────────────────────────────────────────────────

class SecurityHeadersMiddleware:
    """
    ASGI middleware that applies security headers idempotently on every
    response, except for configured path prefixes.
    """

    def __init__(self, app: ASGIApp, cfg: Optional[SecurityHeadersConfig] = None) -> None:
        self.app = app
        self.cfg = cfg or SecurityHeadersConfig.from_settings()
        self._raw = [(k.encode("latin-1"), v.encode("latin-1")) for k, v in self.cfg.headers()]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        path = scope.get("path", "")
        if any(path.startswith(prefix) for prefix in self.cfg.skip_paths):
            return await self.app(scope, receive, send)

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                raw_headers = list(message.get("headers", []))
                present = {k.lower() for k, _ in raw_headers}
                raw_headers.extend((k, v) for k, v in self._raw if k.lower() not in present)
                message["headers"] = raw_headers
            await send(message)

        await self.app(scope, receive, send_wrapper)


# ─────────────────────────────────────────────────────────────
# 🔓 Public helpers
# ─────────────────────────────────────────────────────────────

def set_sensitive_cache(response: Response) -> None:
    """Mark a response as not cacheable (token-issuing routes)."""
    response.headers.setdefault("Cache-Control", "no-store")
    response.headers.setdefault("Pragma", "no-cache")
    response.headers.setdefault("Expires", "0")


# ─────────────────────────────────────────────────────────────
# 🌐 CORS installer
# ─────────────────────────────────────────────────────────────

def configure_cors(app) -> None:
    """
    Install CORS from settings. `*` (default) reflects any origin without
    credentials; an explicit allow-list enables credentials so browsers
    send the session cookie.
    """
    origins = settings.cors_origins_list
    any_origin = settings.cors_allows_any_origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if any_origin else origins,
        allow_origin_regex=settings.ALLOW_ORIGINS_REGEX,
        allow_credentials=not any_origin,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )


def install_security(app) -> None:
    """Add the security headers middleware when enabled."""
    if settings.SECURITY_HEADERS_ENABLED:
        app.add_middleware(SecurityHeadersMiddleware)


__all__ = [
    "SecurityHeadersConfig",
    "SecurityHeadersMiddleware",
    "install_security",
    "configure_cors",
    "set_sensitive_cache",
]
