from __future__ import annotations

import json
import string
from typing import Any

from .errors import PayloadError

UINT256_MAX = 2**256 - 1


def parse_uint(value: Any) -> int:
    """Parse a decimal or 0x-hex unsigned integer into an int."""
    if isinstance(value, bool):
        raise ValueError(f"Not an unsigned integer: {value!r}")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty integer literal")
        # ASCII digits only: no sign, underscores or Unicode digits.
        if text[:2].lower() == "0x":
            digits, base, alphabet = text[2:], 16, string.hexdigits
        else:
            digits, base, alphabet = text, 10, string.digits
        if not digits or any(c not in alphabet for c in digits):
            raise ValueError(f"Not an unsigned integer: {value!r}")
        result = int(digits, base)
    else:
        raise ValueError(f"Not an unsigned integer: {value!r}")

    if result < 0 or result > UINT256_MAX:
        raise ValueError(f"Value out of uint256 range: {value!r}")
    return result


def parse_payload(text: str) -> list[int]:
    """
    Parse a message payload given as a JSON-like array.

    Accepts the same forms `cast` takes for a uint256[] argument:
    integers, decimal strings and 0x-hex strings, e.g. ``[1,2]`` or
    ``["0x1", 2]``. Bare hex literals (``[0x1,0x2]``) are accepted too.

    Raises:
        PayloadError: If the text is not an array of unsigned integers
    """
    stripped = text.strip()
    try:
        items = json.loads(stripped)
    except json.JSONDecodeError:
        if not (stripped.startswith("[") and stripped.endswith("]")):
            raise PayloadError(f"Payload must be an array, got: {text!r}") from None
        inner = stripped[1:-1].strip()
        items = [part.strip() for part in inner.split(",")] if inner else []

    if not isinstance(items, list):
        raise PayloadError(f"Payload must be an array, got: {text!r}")

    try:
        return [parse_uint(item) for item in items]
    except ValueError as exc:
        raise PayloadError(str(exc)) from None
