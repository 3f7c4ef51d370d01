"""Request dispatch: build, send, parse and normalize one request.

Every call completes exactly once, either as ``Success`` or ``Failure``.
Runtime failures never propagate as exceptions; only contract violations
(unsupported verb, non-absolute URL) raise, and they do so before any I/O.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

import httpx
from loguru import logger

from cealloga.client.normalize import normalize
from cealloga.client.request import HeadersFactory, RequestConfig, Verb, build_request
from cealloga.client.result import Failure, FailureKind, RequestResult, ResponseMetadata, Success
from cealloga.client.transport import Transport
from cealloga.utils.exceptions import InvalidUrlError

Callback = Callable[[BaseException | None, Any, ResponseMetadata | None], Any]


@dataclass(slots=True)
class DispatcherOptions:
    """Per-client dispatch settings."""

    headers_factory: HeadersFactory | None = None
    extra_headers: Mapping[str, str] = field(default_factory=dict)
    decode_buffers: bool = True


def validate_url(url: Any) -> str:
    """Return ``url`` when it is an absolute http(s) URL with a host."""
    if not isinstance(url, str) or not url:
        raise InvalidUrlError(url)
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidUrlError(url) from exc
    if parsed.scheme not in {"http", "https"} or not parsed.host:
        raise InvalidUrlError(url)
    return url


class Dispatcher:
    def __init__(self, transport: Transport, *, options: DispatcherOptions | None = None):
        self.transport = transport
        self.options = options or DispatcherOptions()
        self._pending: set[asyncio.Task] = set()

    def _prepare(self, url: Any, verb: Verb | str, body: Any) -> tuple[str, RequestConfig]:
        url = validate_url(url)
        config = build_request(
            verb,
            body,
            headers_factory=self.options.headers_factory,
            extra_headers=self.options.extra_headers,
        )
        return url, config

    async def send(self, url: str, verb: Verb | str, body: Any = None) -> RequestResult:
        """Perform one request and return its normalized result."""
        url, config = self._prepare(url, verb, body)
        return await self._send(url, config)

    async def _send(self, url: str, config: RequestConfig) -> RequestResult:
        logger.debug(f"dispatch {config.method.value} {url}")
        try:
            response = await self.transport(url, config)
        except Exception as exc:
            logger.debug(f"transport failed for {config.method.value} {url}: {exc}")
            return Failure(FailureKind.TRANSPORT, exc, None)

        metadata = ResponseMetadata.from_response(response, url)
        try:
            parsed = await response.json()
            value = normalize(parsed, decode_buffers=self.options.decode_buffers)
        except Exception as exc:
            logger.debug(f"unparseable body for {config.method.value} {url} (status {metadata.status}): {exc}")
            return Failure(FailureKind.PARSE, exc, metadata)
        return Success(value, metadata)

    def request(self, url: str, verb: Verb | str, body: Any, callback: Callback) -> asyncio.Task:
        """
        Fire-and-forget form of ``send``.

        ``callback(error, result, response)`` is invoked exactly once when the
        request settles. The returned task resolves to the ``RequestResult``
        and exists only so callers can await completion if they want to.
        """
        url, config = self._prepare(url, verb, body)
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._send_and_notify(url, config, callback))
        # The loop only keeps weak references to tasks.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _send_and_notify(self, url: str, config: RequestConfig, callback: Callback) -> RequestResult:
        result = await self._send(url, config)
        invoke_callback(callback, result)
        return result


def invoke_callback(callback: Callback | None, result: RequestResult) -> None:
    """Deliver ``result`` to ``callback`` once; a raising callback is logged, not retried."""
    if callback is None:
        return
    try:
        callback(*result.as_callback_args())
    except Exception:
        logger.exception("request callback raised")
