"""Request dispatch and response normalization core."""

from cealloga.client.dispatcher import Dispatcher, DispatcherOptions, validate_url
from cealloga.client.normalize import decode_buffer_payload, is_buffer_payload, normalize
from cealloga.client.request import RequestConfig, Verb, build_request
from cealloga.client.result import Failure, FailureKind, RequestResult, ResponseMetadata, Success
from cealloga.client.transport import HttpxResponse, HttpxTransport, Transport, TransportResponse

__all__ = [
    "Dispatcher",
    "DispatcherOptions",
    "Failure",
    "FailureKind",
    "HttpxResponse",
    "HttpxTransport",
    "RequestConfig",
    "RequestResult",
    "ResponseMetadata",
    "Success",
    "Transport",
    "TransportResponse",
    "Verb",
    "build_request",
    "decode_buffer_payload",
    "is_buffer_payload",
    "normalize",
    "validate_url",
]
