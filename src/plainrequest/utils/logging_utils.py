"""Centralized logging configuration helpers."""

from __future__ import annotations

import logging
from typing import Optional

from ..config.settings import get_settings


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Return the package logger configured with the project defaults."""

    logger = logging.getLogger("plainrequest")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel((level or get_settings().log_level).upper())
    return logger
