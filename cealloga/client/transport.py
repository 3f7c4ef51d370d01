"""Transport capability used by the dispatcher, plus the default httpx implementation."""

from __future__ import annotations

import json
from typing import Any, Mapping, Protocol

import httpx
from loguru import logger

from cealloga.client.request import SAME_ORIGIN, RequestConfig
from cealloga.utils.exceptions import ResponseParseError, TransportError


class TransportResponse(Protocol):
    status: int
    headers: Mapping[str, str]

    async def json(self) -> Any: ...


class Transport(Protocol):
    async def __call__(self, url: str, config: RequestConfig) -> TransportResponse: ...


class HttpxResponse:
    """Adapter exposing ``status`` and an awaitable ``json()`` over ``httpx.Response``."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    @property
    def url(self) -> str:
        return str(self._response.url)

    @property
    def text(self) -> str:
        return self._response.text

    async def json(self) -> Any:
        raw = await self._response.aread()
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            snippet = raw[:200].decode("utf-8", errors="replace")
            raise ResponseParseError(
                f"non-json body (status {self.status}): {exc}",
                snippet=snippet,
            ) from exc

    def __repr__(self) -> str:
        return f"<HttpxResponse [{self.status}] {self.url}>"


def _origin(url: httpx.URL) -> tuple[str, str, int | None]:
    return url.scheme, url.host, url.port


class HttpxTransport:
    """
    Default transport built on ``httpx.AsyncClient``.

    When ``origin`` is set, requests made with ``mode="same-origin"`` to any
    other scheme/host/port are rejected before they leave the client.
    """

    def __init__(
        self,
        *,
        origin: str | None = None,
        timeout: float = 20.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.origin = httpx.URL(origin) if origin else None
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _check_origin(self, url: httpx.URL, config: RequestConfig) -> None:
        if config.mode != SAME_ORIGIN or self.origin is None:
            return
        if _origin(url) != _origin(self.origin):
            raise TransportError(
                f"cross-origin request blocked in same-origin mode: {url}",
                url=str(url),
            )

    async def __call__(self, url: str, config: RequestConfig) -> HttpxResponse:
        target = httpx.URL(url)
        self._check_origin(target, config)
        try:
            response = await self._client.request(
                config.method.value,
                target,
                content=config.content,
                headers=config.headers,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"timeout: {config.method.value} {url}", url=url, timeout=True) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"network error: {config.method.value} {url}: {exc}", url=url) from exc
        logger.debug(f"HTTP {config.method.value} {url} -> {response.status_code}")
        return HttpxResponse(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
