"""Exception types raised by the dispatcher."""

from __future__ import annotations

from typing import Any


class ConfigurationError(ValueError):
    """Raised before any I/O when a request cannot be resolved to a URL."""


class RequestError(RuntimeError):
    """Raised when the remote answers with a failure status code."""

    def __init__(self, message: str, status_code: int, body: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __repr__(self) -> str:
        return f"RequestError(status_code={self.status_code!r}, message={self.message!r})"
