import logging
import sys
import threading

import pytest
from httpx import AsyncClient
from loguru import logger

from app.core.logger import HTTP_LEVEL, install_uncaught_exception_hooks


@pytest.fixture()
def captured():
    records = []
    sink_id = logger.add(lambda msg: records.append(msg.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


@pytest.mark.anyio
async def test_access_log_line_at_http_level(async_client: AsyncClient, captured):
    await async_client.get("/healthz", headers={"User-Agent": "pytest-agent"})

    access = [r for r in captured if r["level"].name == HTTP_LEVEL]
    assert access, "no access log line emitted"
    line = access[-1]["message"]
    assert '"GET /healthz HTTP/1.1" 200' in line
    assert line.endswith('"-" "pytest-agent"')
    assert access[-1]["extra"]["request_id"]


def test_stdlib_loggers_are_intercepted(captured):
    logging.getLogger("uvicorn.error").warning("from stdlib")

    assert any(r["message"] == "from stdlib" and r["level"].name == "WARNING" for r in captured)


def test_uncaught_exception_hook_logs(captured, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)
    install_uncaught_exception_hooks()
    try:
        raise RuntimeError("nobody caught me")
    except RuntimeError:
        sys.excepthook(*sys.exc_info())

    assert any("UNCAUGHT_EXCEPTION OCCURRED : RuntimeError: nobody caught me" in r["message"] for r in captured)
