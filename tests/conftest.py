"""Pytest hooks and fixtures."""

from __future__ import annotations

import asyncio
import copy
import json
import os
from typing import Any

import pytest


class FakeResponse:
    """Transport response with a status and an awaitable json()."""

    def __init__(
        self,
        body: Any = None,
        *,
        status: int = 200,
        raw: str | None = None,
        headers: dict[str, str] | None = None,
        delay: float = 0.0,
    ):
        self._body = body
        self._raw = raw
        self.status = status
        self.headers = headers or {"content-type": "application/json"}
        self.delay = delay

    async def json(self) -> Any:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self._raw is not None:
            return json.loads(self._raw)
        return copy.deepcopy(self._body)


class FakeTransport:
    """Routes ``(method, url)`` to a FakeResponse or an exception to raise."""

    def __init__(self, routes: dict[tuple[str, str], Any] | None = None):
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, Any]] = []

    def add(self, method: str, url: str, outcome: Any) -> None:
        self.routes[(method, url)] = outcome

    async def __call__(self, url: str, config: Any) -> FakeResponse:
        self.calls.append((url, config))
        outcome = self.routes.get((config.method.value, url))
        if outcome is None:
            raise ConnectionError(f"no route for {config.method.value} {url}")
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome.delay:
            await asyncio.sleep(outcome.delay)
        return outcome


class CallbackRecorder:
    """Records every (error, result, response) invocation."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, Any, Any]] = []

    def __call__(self, error: Any, result: Any, response: Any) -> None:
        self.calls.append((error, result, response))

    @property
    def once(self) -> tuple[Any, Any, Any]:
        assert len(self.calls) == 1, f"expected exactly one callback, got {len(self.calls)}"
        return self.calls[0]


def buffer_of(value: Any) -> dict[str, Any]:
    """Wrap ``value`` the way the service serializes a byte buffer."""
    return {"type": "Buffer", "data": list(json.dumps(value).encode("utf-8"))}


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def as_buffer():
    return buffer_of


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep CEALLOGA_* variables and ~/.cealloga out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("CEALLOGA_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
