"""Result types delivered for every dispatched request."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union


class FailureKind(Enum):
    TRANSPORT = "transport"
    PARSE = "parse"


@dataclass(frozen=True, slots=True)
class ResponseMetadata:
    """Status and headers of a response that reached the client."""

    status: int
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    raw: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @classmethod
    def from_response(cls, response: Any, url: str) -> "ResponseMetadata":
        status = getattr(response, "status", None)
        if status is None:
            status = getattr(response, "status_code", 0)
        headers = getattr(response, "headers", None) or {}
        return cls(status=int(status or 0), url=url, headers=headers, raw=response)


@dataclass(frozen=True, slots=True)
class Success:
    value: Any
    metadata: ResponseMetadata

    ok = True

    def unwrap(self) -> Any:
        return self.value

    def as_callback_args(self) -> tuple[None, Any, ResponseMetadata]:
        return None, self.value, self.metadata


@dataclass(frozen=True, slots=True)
class Failure:
    kind: FailureKind
    error: BaseException
    metadata: ResponseMetadata | None = None

    ok = False

    def unwrap(self) -> Any:
        raise self.error

    def as_callback_args(self) -> tuple[BaseException, None, ResponseMetadata | None]:
        return self.error, None, self.metadata


RequestResult = Union[Success, Failure]
