import json

import httpx
import pytest

from cealloga.client.dispatcher import Dispatcher
from cealloga.client.request import build_request
from cealloga.client.result import FailureKind
from cealloga.client.transport import HttpxResponse, HttpxTransport
from cealloga.utils.exceptions import ResponseParseError, TransportError

HOST = "http://cealloga.test"


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_post_sends_method_body_and_content_type() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "X"})

    async with _mock_client(handler) as client:
        transport = HttpxTransport(origin=HOST, client=client)
        response = await transport(f"{HOST}/code/validate", build_request("POST", {"a": 1}))
        assert response.status == 200
        assert await response.json() == {"id": "X"}

    assert seen[0].method == "POST"
    assert seen[0].headers["content-type"] == "application/json"
    assert json.loads(seen[0].content) == {"a": 1}


@pytest.mark.asyncio
async def test_get_sends_no_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    async with _mock_client(handler) as client:
        transport = HttpxTransport(client=client)
        await transport(f"{HOST}/code?name=barchart&", build_request("GET", {"ignored": 1}))

    assert seen[0].method == "GET"
    assert seen[0].content == b""
    assert seen[0].url.params["name"] == "barchart"


@pytest.mark.asyncio
async def test_cross_origin_request_is_blocked_in_same_origin_mode() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("request must not be sent")

    async with _mock_client(handler) as client:
        transport = HttpxTransport(origin=HOST, client=client)
        with pytest.raises(TransportError) as err:
            await transport("http://elsewhere.test/code", build_request("GET"))
    assert err.value.code == "TRANSPORT_ERROR"
    assert err.value.url == "http://elsewhere.test/code"


@pytest.mark.asyncio
async def test_no_origin_allows_any_host() -> None:
    async with _mock_client(lambda request: httpx.Response(200, json={})) as client:
        transport = HttpxTransport(client=client)
        response = await transport("http://elsewhere.test/code", build_request("GET"))
    assert response.status == 200


@pytest.mark.asyncio
async def test_network_errors_map_to_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _mock_client(handler) as client:
        transport = HttpxTransport(client=client)
        with pytest.raises(TransportError) as err:
            await transport(f"{HOST}/code", build_request("GET"))
    assert err.value.code == "TRANSPORT_ERROR"
    assert "connection refused" in err.value.message


@pytest.mark.asyncio
async def test_timeouts_map_to_transport_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with _mock_client(handler) as client:
        transport = HttpxTransport(client=client)
        with pytest.raises(TransportError) as err:
            await transport(f"{HOST}/code", build_request("GET"))
    assert err.value.code == "TRANSPORT_TIMEOUT"


@pytest.mark.asyncio
async def test_non_json_body_raises_parse_error() -> None:
    response = HttpxResponse(httpx.Response(500, text="<html>down</html>"))
    with pytest.raises(ResponseParseError) as err:
        await response.json()
    assert "status 500" in err.value.message
    assert err.value.details["snippet"] == "<html>down</html>"


@pytest.mark.asyncio
async def test_dispatcher_over_httpx_end_to_end() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/cealloga/_test/abc":
            payload = list(json.dumps({"labels": ["blue"], "series": [1]}).encode())
            return httpx.Response(200, json={"type": "Buffer", "data": payload})
        return httpx.Response(404, text="not found")

    async with _mock_client(handler) as client:
        dispatcher = Dispatcher(HttpxTransport(origin=HOST, client=client))
        ok = await dispatcher.send(f"{HOST}/cealloga/_test/abc", "POST", {"colours": ["blue"]})
        missing = await dispatcher.send(f"{HOST}/cealloga/_test/zzz", "POST", {})
        blocked = await dispatcher.send("http://elsewhere.test/x", "GET")

    assert ok.value == {"labels": ["blue"], "series": [1]}
    assert ok.metadata.status == 200
    assert missing.kind is FailureKind.PARSE
    assert missing.metadata.status == 404
    assert blocked.kind is FailureKind.TRANSPORT
    assert blocked.metadata is None


@pytest.mark.asyncio
async def test_injected_client_is_not_closed() -> None:
    client = _mock_client(lambda request: httpx.Response(200, json={}))
    async with HttpxTransport(client=client):
        pass
    assert client.is_closed is False
    await client.aclose()


@pytest.mark.asyncio
async def test_owned_client_is_closed() -> None:
    transport = HttpxTransport(timeout=1.0)
    await transport.aclose()
    assert transport._client.is_closed is True
