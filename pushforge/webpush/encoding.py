"""Unpadded base64url and canonical JSON helpers."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any


def b64url_encode(data: bytes | str) -> str:
    """URL-safe base64 encode without padding."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """Decode unpadded (or padded) base64url.

    Raises ``ValueError`` on empty input or characters outside the alphabet.
    Standard-alphabet input (``+`` and ``/``) is accepted, as some browsers
    serialize subscription keys that way.
    """
    if not data:
        raise ValueError("Invalid input: empty base64url string")

    normalized = data.strip().rstrip("=").replace("+", "-").replace("/", "_")
    padded = normalized + "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64url string: {e}") from e


def canonical_json(value: Any) -> str:
    """Compact JSON text, matching what a browser's ``JSON.stringify`` emits."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
