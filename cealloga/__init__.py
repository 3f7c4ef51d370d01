"""cealloga - async client for the Cealloga code and execution service."""

__version__ = "0.1.0"
__logo__ = "ᚳ"

from cealloga.api.client import ApiClient, api
from cealloga.client.result import Failure, FailureKind, RequestResult, ResponseMetadata, Success

__all__ = [
    "ApiClient",
    "Failure",
    "FailureKind",
    "RequestResult",
    "ResponseMetadata",
    "Success",
    "api",
    "__version__",
]
