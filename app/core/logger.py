# app/core/logger.py
from __future__ import annotations

"""
Movies & Messages API — Logging (Loguru)
----------------------------------------
- Pretty console logs by default; optional JSON logs via `LOG_JSON=1`
- Request correlation: supports `request_id` (from RequestIDMiddleware)
- `HTTP` level (between DEBUG and INFO) used by the access-log middleware
- Intercepts stdlib/uvicorn/fastapi/starlette logs into Loguru
- Optional file sink with rotation
- Process-wide hooks that log uncaught exceptions instead of exiting

Env
---
LOG_LEVEL=HTTP|DEBUG|INFO|WARNING|ERROR (default: HTTP)
LOG_JSON=1 (enable JSON logs; pretty logs otherwise)
LOG_TO_FILE=1 (write logs/app.log with rotation; default: 1)
LOG_DIR=logs
LOG_FILE=app.log
LOG_ROTATION=10 MB
APP_DEBUG=1 (enables backtrace/diagnose in console sink)
"""

import asyncio
import json
import logging
import os
import sys
import threading
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from loguru import logger

# ─────────────────────────────────────────────────────────────
# ⚙️ Env
# ─────────────────────────────────────────────────────────────
load_dotenv()

HTTP_LEVEL = "HTTP"
HTTP_LEVEL_NO = 15

LOG_LEVEL = os.getenv("LOG_LEVEL", HTTP_LEVEL).upper()
LOG_JSON = os.getenv("LOG_JSON", "0").lower() in {"1", "true", "yes"}
APP_DEBUG = os.getenv("APP_DEBUG", "0").lower() in {"1", "true", "yes"}

LOG_TO_FILE = os.getenv("LOG_TO_FILE", "1").lower() in {"1", "true", "yes"}
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE = os.getenv("LOG_FILE", "app.log")
LOG_ROTATION = os.getenv("LOG_ROTATION", "10 MB")

# Custom level must exist before any sink filters on it
try:
    logger.level(HTTP_LEVEL)
except ValueError:
    logger.level(HTTP_LEVEL, no=HTTP_LEVEL_NO, color="<magenta>")

# Remove default handler
logger.remove()


# ─────────────────────────────────────────────────────────────
# 🧾 Formatters
# ─────────────────────────────────────────────────────────────
def _fmt_pretty(record):
    """
    Colorized single-line formatter with request_id support.
    """
    record["extra"]["request_id"] = record["extra"].get("request_id", "N/A")
    safe_name = (record["name"] or "").replace("<", "[").replace(">", "]")
    safe_func = record["function"].replace("<", "[").replace(">", "]")
    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        f"<cyan>{safe_name}</cyan>:<cyan>{safe_func}</cyan>:<cyan>{{line}}</cyan> - "
        "<level>{message}</level> | request_id={extra[request_id]}\n{exception}"
    )


def _serialize(record) -> str:
    payload: Dict[str, Any] = {
        "ts": record["time"].timestamp(),
        "time": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%f%z"),
        "level": record["level"].name,
        "logger": record["name"],
        "func": record["function"],
        "line": record["line"],
        "message": record["message"],
        "request_id": record["extra"].get("request_id", "N/A"),
    }
    for k, v in record["extra"].items():
        if k not in payload and k != "json":
            payload[k] = v
    if record["exception"] is not None:
        payload["exception"] = repr(record["exception"].value)
    return json.dumps(payload, ensure_ascii=False, default=str)


def _fmt_json(record):
    """
    Structured JSON logs, safe for ingestion (Datadog, Loki, ELK).
    """
    record["extra"]["json"] = _serialize(record)
    return "{extra[json]}\n"


CONSOLE_FORMAT = _fmt_json if LOG_JSON else _fmt_pretty

# ─────────────────────────────────────────────────────────────
# 📤 Sinks
# ─────────────────────────────────────────────────────────────
logger.add(
    sys.stdout,
    level=LOG_LEVEL,
    format=CONSOLE_FORMAT,
    enqueue=True,
    backtrace=APP_DEBUG,
    diagnose=APP_DEBUG,
)

if LOG_TO_FILE:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(LOG_DIR / LOG_FILE),
        rotation=LOG_ROTATION,
        level=LOG_LEVEL,
        format=CONSOLE_FORMAT,
        enqueue=True,
        backtrace=False,
        diagnose=False,
    )


# ─────────────────────────────────────────────────────────────
# 🔁 Intercept stdlib logging → Loguru
# ─────────────────────────────────────────────────────────────
class InterceptHandler(logging.Handler):
    """Route standard logging records into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


# uvicorn.access is replaced by our own access-log middleware
for name in ("uvicorn", "uvicorn.error", "fastapi", "starlette", "app"):
    std_logger = logging.getLogger(name)
    std_logger.handlers = [InterceptHandler()]
    std_logger.setLevel(logging.DEBUG if LOG_LEVEL == "DEBUG" else logging.INFO)
    std_logger.propagate = False


# ─────────────────────────────────────────────────────────────
# 💥 Uncaught exceptions: log, never exit
# ─────────────────────────────────────────────────────────────
def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    logger.opt(exception=(exc_type, exc_value, exc_tb)).error(
        f"UNCAUGHT_EXCEPTION OCCURRED : {exc_type.__name__}: {exc_value}"
    )


def _log_uncaught_thread(args: threading.ExceptHookArgs) -> None:
    _log_uncaught(args.exc_type, args.exc_value, args.exc_traceback)


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    exc = context.get("exception")
    message = context.get("message", "unhandled exception in event loop")
    if exc is not None:
        logger.opt(exception=exc).error(f"UNCAUGHT_EXCEPTION OCCURRED : {message}")
    else:
        logger.error(f"UNCAUGHT_EXCEPTION OCCURRED : {message}")


def install_uncaught_exception_hooks(loop: asyncio.AbstractEventLoop | None = None) -> None:
    """
    Log uncaught exceptions from the main thread, worker threads and the
    asyncio loop (when given). The process keeps serving.
    """
    sys.excepthook = _log_uncaught
    threading.excepthook = _log_uncaught_thread
    if loop is not None:
        loop.set_exception_handler(_log_loop_exception)


__all__ = ["logger", "HTTP_LEVEL", "install_uncaught_exception_hooks", "InterceptHandler"]
