"""Test configuration for ensuring the src package is importable."""

from __future__ import annotations

import json as jsonlib
import logging
import sys
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, Iterator, List, Optional

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


async def _chunks(payload: bytes) -> AsyncIterator[bytes]:
    if payload:
        yield payload


class Recorder:
    """MockTransport handler that records requests and replays one response.

    Bodies are served through an async iterator so that streamed responses
    reach the caller unread.
    """

    def __init__(
        self,
        status_code: int = 200,
        *,
        json: Any = None,
        text: Optional[str] = None,
        content: bytes = b"",
    ) -> None:
        self.status_code = status_code
        self.headers: Dict[str, str] = {}
        if json is not None:
            content = jsonlib.dumps(json).encode("utf-8")
            self.headers["Content-Type"] = "application/json"
        elif text is not None:
            content = text.encode("utf-8")
            self.headers["Content-Type"] = "text/plain; charset=utf-8"
        self.content = content
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code, headers=self.headers, content=_chunks(self.content)
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def recorder_factory() -> Callable[..., Recorder]:
    return Recorder


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PLAINREQUEST_ORIGIN", "PLAINREQUEST_PORT", "PLAINREQUEST_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo configure_logging() calls made by a test."""
    logger = logging.getLogger("plainrequest")
    level = logger.level
    handlers = list(logger.handlers)
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
