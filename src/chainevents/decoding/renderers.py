"""Field value renderers: turn one decoded value into display text.

Each renderer is a plain `(value) -> str` callable. Which one applies is
decided by the field's type tag through a `RendererRegistry`
(see `chainevents.decoding.registry`).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

FieldRenderer = Callable[[Any], str]

# Type tag the chain metadata uses for raw byte payloads that are conventionally text.
BYTES_TYPE = "Bytes"


def render_default(value: Any) -> str:
    """Default string form, no special decoding."""
    return str(value)


def as_bytes(value: Any) -> bytes:
    """Coerce a decoded byte-string value into raw bytes.

    Accepts bytes-like objects, lists of ints, 0x-prefixed hex strings and
    plain strings (taken as their UTF-8 encoding; the decoder may already
    have turned printable payloads into text).
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (list, tuple)):
        try:
            return bytes(value)
        except (TypeError, ValueError):
            # not a list of octets
            return str(value).encode("utf-8")
    if isinstance(value, str):
        if value[:2].lower() == "0x":
            try:
                return bytes.fromhex(value[2:])
            except ValueError:
                pass  # not hex after all; fall through to text
        return value.encode("utf-8")
    return str(value).encode("utf-8")


def render_bytes(value: Any) -> str:
    """Read the payload bytes as UTF-8 text.

    Leading/trailing NUL bytes are dropped. Invalid UTF-8 degrades to the
    0x-hex string.
    """
    raw = as_bytes(value)
    try:
        return raw.strip(b"\x00").decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("byte string is not valid UTF-8, rendering as hex: 0x%s", raw.hex())
        return "0x" + raw.hex()
