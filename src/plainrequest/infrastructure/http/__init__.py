"""HTTP dispatch infrastructure."""

from .client import HTTPClientFactory, get_async_client
from .dispatcher import (
    VERBS,
    Dispatcher,
    ResponseStream,
    Shorthand,
    create_context,
    get_default_request,
)

__all__ = [
    "VERBS",
    "Dispatcher",
    "HTTPClientFactory",
    "ResponseStream",
    "Shorthand",
    "create_context",
    "get_async_client",
    "get_default_request",
]
