"""Domain layer - Request options, results and errors."""

from .errors import ConfigurationError, RequestError
from .models import ContextOptions, RequestOptions, Result

__all__ = [
    "ConfigurationError",
    "ContextOptions",
    "RequestError",
    "RequestOptions",
    "Result",
]
