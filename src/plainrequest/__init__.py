"""Minimal async HTTP request dispatcher with origin/port contexts."""

from .domain import ConfigurationError, ContextOptions, RequestError, RequestOptions, Result
from .infrastructure.http import (
    VERBS,
    Dispatcher,
    ResponseStream,
    create_context,
    get_default_request,
)
from .utils.parsing import try_parse

__all__ = [
    "VERBS",
    "ConfigurationError",
    "ContextOptions",
    "Dispatcher",
    "RequestError",
    "RequestOptions",
    "ResponseStream",
    "Result",
    "create_context",
    "get_default_request",
    "try_parse",
]
