"""Resource wrappers for the ``/code`` and ``/cealloga`` service groups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from cealloga.api.endpoints import ENDPOINTS
from cealloga.api.query import path_segment, query_string
from cealloga.client.dispatcher import Callback
from cealloga.client.request import Verb
from cealloga.client.result import RequestResult

if TYPE_CHECKING:
    from cealloga.api.client import ApiClient


class Cealloga:
    """Execution endpoints: run a published artifact by name or a test artifact by id."""

    def __init__(self, client: "ApiClient"):
        self._client = client

    async def exec(
        self,
        name: str | None = None,
        body: Any = None,
        callback: Callback | None = None,
        *,
        endpoint: str | None = None,
    ) -> RequestResult:
        if endpoint is None and name is None:
            raise ValueError("exec requires a name or an endpoint")
        endpoint = endpoint or f"{ENDPOINTS['cealloga_prod']}/{path_segment(name)}"
        return await self._client.call(endpoint, Verb.POST, body, callback)

    async def test(
        self,
        id: str | None = None,
        body: Any = None,
        callback: Callback | None = None,
        *,
        endpoint: str | None = None,
    ) -> RequestResult:
        if endpoint is None and id is None:
            raise ValueError("test requires an id or an endpoint")
        endpoint = endpoint or f"{ENDPOINTS['cealloga_dev']}/{path_segment(id)}"
        return await self._client.call(endpoint, Verb.POST, body, callback)

    _test = test


class Code:
    """Code artifact endpoints."""

    def __init__(self, client: "ApiClient"):
        self._client = client

    async def list(
        self,
        query: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> RequestResult:
        endpoint = f"{ENDPOINTS['code_list']}?{query_string(query)}"
        return await self._client.call(endpoint, Verb.GET, None, callback)

    async def publish(self, id: str, callback: Callback | None = None) -> RequestResult:
        endpoint = f"{ENDPOINTS['code_publish']}/{path_segment(id)}"
        return await self._client.call(endpoint, Verb.GET, None, callback)

    async def record(self, id: str, callback: Callback | None = None) -> RequestResult:
        endpoint = f"{ENDPOINTS['code_record']}/{path_segment(id)}"
        return await self._client.call(endpoint, Verb.GET, None, callback)

    async def unpublish(self, name: str, callback: Callback | None = None) -> RequestResult:
        endpoint = f"{ENDPOINTS['code_unpublish']}/{path_segment(name)}"
        return await self._client.call(endpoint, Verb.GET, None, callback)

    async def validate(self, body: Any, callback: Callback | None = None) -> RequestResult:
        return await self._client.call(ENDPOINTS["code_validate"], Verb.POST, body, callback)
