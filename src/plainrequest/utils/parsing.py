"""Best-effort JSON decoding of response payloads."""

import json
from typing import Any


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {token}")


def try_parse(content: Any) -> Any:
    """Decode ``content`` as strict JSON, or hand it back untouched.

    Only text-like input (``str``, ``bytes``, ``bytearray``) is parsed; anything
    else, and any text that is not valid JSON, is returned as-is. ``NaN`` and
    ``Infinity`` are not JSON and are returned as text.

    Args:
        content: Raw payload.

    Returns:
        The decoded value, or ``content`` when it cannot be decoded.
    """
    if not isinstance(content, (str, bytes, bytearray)):
        return content
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return content
