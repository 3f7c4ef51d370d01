"""Cealloga REST API client."""

from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from cealloga.api.resources import Cealloga, Code
from cealloga.client.dispatcher import Callback, Dispatcher, DispatcherOptions, invoke_callback
from cealloga.client.request import HeadersFactory, Verb
from cealloga.client.result import RequestResult
from cealloga.client.transport import HttpxTransport, Transport
from cealloga.config.loader import convert_keys
from cealloga.config.schema import ClientConfig

# Option keys that configure collaborators rather than ClientConfig fields.
_HEADERS_FACTORY_KEYS = ("headers_factory", "transport_headers_impl", "Headers")


class ApiClient:
    """
    Client exposing ``code`` and ``cealloga`` resource groups.

    Each instance owns its dispatch settings; nothing is shared between clients.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: Transport | None = None,
        headers_factory: HeadersFactory | None = None,
    ):
        self.config = config or ClientConfig()
        self.host = self.config.host
        self._owned_transport: HttpxTransport | None = None
        if transport is None:
            transport = HttpxTransport(
                origin=self.host if self.config.same_origin else None,
                timeout=self.config.timeout,
            )
            self._owned_transport = transport
        self.dispatcher = Dispatcher(
            transport,
            options=DispatcherOptions(
                headers_factory=headers_factory,
                extra_headers=dict(self.config.headers),
                decode_buffers=self.config.decode_buffer_payloads,
            ),
        )
        self.cealloga = Cealloga(self)
        self.code = Code(self)

    def url(self, endpoint: str) -> str:
        return f"{self.host}{endpoint}"

    async def call(
        self,
        endpoint: str,
        verb: Verb,
        body: Any = None,
        callback: Callback | None = None,
    ) -> RequestResult:
        """Send one request to ``endpoint`` and deliver the result to ``callback`` if given."""
        result = await self.dispatcher.send(self.url(endpoint), verb, body)
        if not result.ok:
            logger.debug(f"{verb.value} {endpoint} failed: {result.error}")
        invoke_callback(callback, result)
        return result

    async def aclose(self) -> None:
        if self._owned_transport is not None:
            await self._owned_transport.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def api(
    options: ClientConfig | Mapping[str, Any] | None = None,
    *,
    transport: Transport | None = None,
    headers_factory: HeadersFactory | None = None,
) -> ApiClient:
    """
    Create a new API client.

    ``options`` may be a ``ClientConfig`` or a mapping of its fields
    (camelCase keys accepted). A mapping may also carry the header
    constructor under ``headersFactory`` / ``transportHeadersImpl`` / ``Headers``.
    """
    if isinstance(options, ClientConfig):
        return ApiClient(options, transport=transport, headers_factory=headers_factory)
    data: dict[str, Any] = {}
    for key, value in (options or {}).items():
        if key == "Headers":
            data[key] = value
        else:
            data.update(convert_keys({key: value}))
    for key in _HEADERS_FACTORY_KEYS:
        factory = data.pop(key, None)
        if factory is not None and headers_factory is None:
            headers_factory = factory
    if transport is None:
        transport = data.pop("transport", None)
    return ApiClient(ClientConfig(**data), transport=transport, headers_factory=headers_factory)
