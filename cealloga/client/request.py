"""Request configuration for the two supported verbs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping

import httpx

from cealloga.utils.exceptions import UnsupportedVerbError

JSON_CONTENT_TYPE = "application/json"
SAME_ORIGIN = "same-origin"

HeadersFactory = Callable[[dict[str, str]], Mapping[str, str]]


class Verb(str, Enum):
    GET = "GET"
    POST = "POST"

    @classmethod
    def coerce(cls, value: Any) -> "Verb":
        """Accept a Verb or a case-insensitive verb name; reject everything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise UnsupportedVerbError(value)


@dataclass(frozen=True, slots=True)
class RequestConfig:
    """Input options for one transport call."""

    method: Verb
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None
    mode: str = SAME_ORIGIN

    @property
    def content(self) -> bytes | None:
        if self.body is None:
            return None
        return self.body.encode("utf-8")


def _serialize_body(body: Any) -> str:
    return json.dumps(body, ensure_ascii=False)


def build_request(
    verb: Verb | str,
    body: Any = None,
    *,
    headers_factory: HeadersFactory | None = None,
    extra_headers: Mapping[str, str] | None = None,
) -> RequestConfig:
    """
    Build transport input options for ``verb``.

    GET never carries a body. POST carries ``body`` serialized as JSON.
    Both always send ``Content-Type: application/json``.
    """
    method = Verb.coerce(verb)
    raw_headers = {k: v for k, v in (extra_headers or {}).items() if k.lower() != "content-type"}
    raw_headers["Content-Type"] = JSON_CONTENT_TYPE
    factory = headers_factory or httpx.Headers
    headers = factory(raw_headers)
    if method is Verb.GET:
        return RequestConfig(method=method, headers=headers)
    return RequestConfig(method=method, headers=headers, body=_serialize_body(body))
