"""Utility functions and helpers."""

from .logging_utils import configure_logging
from .parsing import try_parse

__all__ = ["configure_logging", "try_parse"]
