"""
Exception hierarchy and error helpers for cealloga.

Provides:
- Custom exception classes with error codes
- Error categorization (retryable, fatal, validation)
- Safe error message formatting (no sensitive data leak)
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    TIMEOUT = "timeout"


class CeallogaError(Exception):
    """Base exception for all cealloga client errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class TransportError(CeallogaError):
    """The network call itself failed; no response is available."""

    def __init__(self, message: str, url: str | None = None, *, timeout: bool = False):
        super().__init__(
            message,
            code="TRANSPORT_TIMEOUT" if timeout else "TRANSPORT_ERROR",
            category=ErrorCategory.TIMEOUT if timeout else ErrorCategory.RETRYABLE,
            details={"url": url},
        )
        self.url = url


class ResponseParseError(CeallogaError):
    """A response body (or a decoded buffer payload) is not valid JSON."""

    def __init__(self, message: str, snippet: str | None = None):
        details = {"snippet": snippet} if snippet else {}
        super().__init__(message, code="JSON_PARSE_ERROR", category=ErrorCategory.VALIDATION, details=details)


class UnsupportedVerbError(CeallogaError, ValueError):
    """Request issued with a verb other than GET or POST."""

    def __init__(self, verb: Any):
        super().__init__(
            f"Unsupported request verb: {verb!r}",
            code="UNSUPPORTED_VERB",
            category=ErrorCategory.FATAL,
            details={"verb": str(verb)},
        )


class InvalidUrlError(CeallogaError, ValueError):
    """Request URL is not an absolute http(s) URL."""

    def __init__(self, url: Any):
        super().__init__(
            f"Request URL must be absolute http(s): {url!r}",
            code="INVALID_URL",
            category=ErrorCategory.VALIDATION,
            details={"url": str(url)},
        )


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: BaseException) -> tuple[str, ErrorCategory, bool]:
    """
    Classify an exception and return (error_code, category, should_retry).
    """
    if isinstance(exc, CeallogaError):
        return exc.code, exc.category, exc.category in (ErrorCategory.RETRYABLE, ErrorCategory.TIMEOUT)

    if isinstance(exc, asyncio.TimeoutError):
        return "TIMEOUT", ErrorCategory.TIMEOUT, True

    if isinstance(exc, ConnectionError):
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.VALIDATION, False

    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return "INVALID_VALUE", ErrorCategory.VALIDATION, False

    return "INTERNAL_ERROR", ErrorCategory.FATAL, False


def format_error(exc: BaseException, include_details: bool = False) -> str:
    """Format an exception as a single-line message for display."""
    code, category, _ = classify_exception(exc)
    if isinstance(exc, CeallogaError):
        message = exc.message
    else:
        message = sanitize_error_message(str(exc))
    if include_details:
        return f"Error [{code}] ({category.value}): {message}"
    return f"Error: {message}"
