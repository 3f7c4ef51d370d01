import json

import httpx
import pytest

from cealloga.client.request import JSON_CONTENT_TYPE, SAME_ORIGIN, RequestConfig, Verb, build_request
from cealloga.utils.exceptions import UnsupportedVerbError


@pytest.mark.parametrize("verb", ["GET", "POST", Verb.GET, Verb.POST, "post"])
@pytest.mark.parametrize("body", [None, {"a": 1}, [1, 2], "raw"])
def test_every_request_is_json_and_same_origin(verb, body) -> None:
    config = build_request(verb, body)
    assert config.headers["Content-Type"] == JSON_CONTENT_TYPE
    assert config.mode == SAME_ORIGIN


def test_get_never_carries_body() -> None:
    config = build_request("GET", {"ignored": True})
    assert config.method is Verb.GET
    assert config.body is None
    assert config.content is None


def test_post_serializes_body_as_json() -> None:
    body = {"name": "barchart", "labels": ["blue", "red"], "n": 1}
    config = build_request("POST", body)
    assert config.method is Verb.POST
    assert json.loads(config.body) == body
    assert config.content == config.body.encode("utf-8")


def test_post_with_no_body_sends_json_null() -> None:
    assert build_request("POST").body == "null"


def test_post_serializes_text_bodies_as_json() -> None:
    assert build_request("POST", "hello").body == json.dumps("hello")
    assert build_request("POST", '{"a":1}').body == '"{\\"a\\":1}"'


def test_unsupported_verb_is_rejected() -> None:
    with pytest.raises(UnsupportedVerbError) as err:
        build_request("DELETE")
    assert err.value.code == "UNSUPPORTED_VERB"
    with pytest.raises(ValueError):
        build_request(None)


def test_headers_factory_and_extra_headers() -> None:
    seen = []

    def factory(raw):
        seen.append(dict(raw))
        return dict(raw)

    config = build_request(
        "GET",
        headers_factory=factory,
        extra_headers={"X-Trace": "t1", "content-type": "text/plain"},
    )
    assert seen == [{"X-Trace": "t1", "Content-Type": "application/json"}]
    assert config.headers == {"X-Trace": "t1", "Content-Type": "application/json"}


def test_default_headers_are_httpx_headers() -> None:
    config = build_request("GET")
    assert isinstance(config.headers, httpx.Headers)
    assert config.headers["content-type"] == "application/json"


def test_configs_are_fresh_per_call() -> None:
    first = build_request("POST", {"a": 1})
    second = build_request("POST", {"a": 2})
    assert first is not second
    assert first.body != second.body
    with pytest.raises(AttributeError):
        first.body = "x"  # type: ignore[misc]
    assert isinstance(first, RequestConfig)
