"""Core request/response models for the dispatcher."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ContextOptions(BaseModel):
    """Defaults bound to a dispatcher for a family of requests against one host."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    origin: Optional[str] = None
    port: Optional[int] = None


class RequestOptions(BaseModel):
    """Per-call options accepted by a dispatcher.

    Either ``url`` or ``path`` (together with a context origin) must be given.
    """

    model_config = ConfigDict(extra="forbid")

    url: Optional[str] = None
    path: Optional[str] = None
    method: Optional[str] = None
    body: Any = None
    port: Optional[int] = None
    is_stream: bool = False


class Result(BaseModel):
    """Buffered response: status code and decoded body."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: Any = None
