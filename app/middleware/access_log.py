# app/middleware/access_log.py
from __future__ import annotations

"""
# Access Log Middleware (ASGI)

One line per request in the Apache *combined* format, written at the
custom `HTTP` loguru level:

    127.0.0.1 - - [18/Oct/2026:10:00:00 +0000] "POST /auth/login HTTP/1.1" 200 17 "-" "curl/8.5"

Response size is counted from the body chunks actually sent.
"""

from datetime import datetime, timezone

from loguru import logger
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.logger import HTTP_LEVEL


def _client_host(scope: Scope) -> str:
    headers = Headers(scope=scope)
    fwd = headers.get("x-forwarded-for")
    if fwd:
        return fwd.split(",")[0].strip()
    client = scope.get("client")
    return client[0] if client else "-"


class AccessLogMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        started = datetime.now(timezone.utc)
        outcome = {"status": 500, "size": 0}

        async def _send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                outcome["status"] = message["status"]
            elif message["type"] == "http.response.body":
                outcome["size"] += len(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, receive, _send_wrapper)
        finally:
            logger.log(HTTP_LEVEL, self._format(scope, started, outcome["status"], outcome["size"]))

    @staticmethod
    def _format(scope: Scope, started: datetime, status: int, size: int) -> str:
        headers = Headers(scope=scope)
        path = scope.get("path", "")
        if scope.get("query_string"):
            path = f"{path}?{scope['query_string'].decode('latin-1')}"
        request_line = f"{scope.get('method', '-')} {path} HTTP/{scope.get('http_version', '1.1')}"
        return (
            f'{_client_host(scope)} - - [{started:%d/%b/%Y:%H:%M:%S %z}] "{request_line}" '
            f'{status} {size or "-"} "{headers.get("referer", "-")}" "{headers.get("user-agent", "-")}"'
        )


__all__ = ["AccessLogMiddleware"]
