"""Query-string encoding matching the service's browser client."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: Any) -> str:
    """Percent-encode ``value`` the way encodeURIComponent does."""
    if value is None:
        text = "null"
    elif isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return quote(text, safe=_URI_COMPONENT_SAFE)


def query_string(query: Mapping[str, Any] | None) -> str:
    """Return ``key=value&`` pairs in insertion order (trailing ``&`` included)."""
    if not query:
        return ""
    return "".join(f"{param}={encode_component(value)}&" for param, value in query.items())


def path_segment(value: Any) -> str:
    """Quote a single path segment (ids, artifact names)."""
    return quote(str(value), safe="")
