"""Normalization of parsed response bodies.

Some service endpoints reply with a serialized byte buffer instead of the
JSON document itself::

    {"type": "Buffer", "data": [123, 34, 105, 100, 34, ...]}

The logical result is the JSON text carried in ``data``.
"""

from __future__ import annotations

import json
from typing import Any

from cealloga.utils.exceptions import ResponseParseError

BUFFER_TYPE_TAG = "Buffer"


def _is_byte(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 255


def is_buffer_payload(value: Any) -> bool:
    """Return True when ``value`` is a tagged byte buffer wrapper."""
    if not isinstance(value, dict):
        return False
    if value.get("type") != BUFFER_TYPE_TAG:
        return False
    data = value.get("data")
    if not isinstance(data, list):
        return False
    return all(_is_byte(item) for item in data)


def decode_buffer_payload(value: dict[str, Any]) -> Any:
    """Decode the wrapper's bytes as UTF-8 JSON text and parse it."""
    raw = bytes(value["data"])
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ResponseParseError(f"buffer payload is not valid UTF-8: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"buffer payload is not valid JSON: {exc.msg}", snippet=text[:200]) from exc


def normalize(parsed_body: Any, *, decode_buffers: bool = True) -> Any:
    """Return the logical result for a parsed response body."""
    if decode_buffers and is_buffer_payload(parsed_body):
        return decode_buffer_payload(parsed_body)
    return parsed_body
