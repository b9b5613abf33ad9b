"""
Shopify Client Error Model

This module provides the error handling framework for the Shopify client,
covering caller mistakes, envelope contract violations, failed HTTP requests
and transport failures. Task cancellation is not wrapped: the original
``asyncio.CancelledError`` reaches the caller.
"""

from __future__ import annotations
import json
from typing import Optional, Dict, Any, List, Mapping
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes carried by every client error."""

    UNKNOWN = 1
    INVALID_ARGUMENT = 2

    # Envelope / decoding errors (100-199)
    PROTOCOL_MISMATCH = 100

    # Transport errors (200-299)
    TRANSPORT_ERROR = 200
    CONNECTION_FAILED = 201
    TIMEOUT = 202

    # HTTP errors (300-399)
    REQUEST_FAILED = 300
    RATE_LIMITED = 301


class ShopifyError(Exception):
    """
    Base class for all Shopify client errors.

    Provides a code, a message and structured details for every failure.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize a Shopify error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidArgumentError(ShopifyError):
    """Malformed caller input, detected before any network call."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details, cause)


class ProtocolMismatchError(ShopifyError):
    """A response body violates the expected envelope contract."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.PROTOCOL_MISMATCH, details, cause)


class TransportError(ShopifyError):
    """Network-level failure; no HTTP response was received."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.TRANSPORT_ERROR, details, cause)


class ConnectionFailedError(TransportError):
    """Connection failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.CONNECTION_FAILED


class RequestTimeoutError(TransportError):
    """Request timeouts."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.TIMEOUT


class RequestFailedError(ShopifyError):
    """
    Non-2xx HTTP response.

    Carries the status code plus whatever the platform said about the failure:
    field-level messages (``{"errors": {"title": ["can't be blank"]}}``),
    top-level messages (``{"errors": "Not Found"}``), or only the raw body when
    it could not be parsed.
    """

    def __init__(self, status_code: int, message: Optional[str] = None,
                 messages: Optional[List[str]] = None,
                 field_errors: Optional[Dict[str, List[str]]] = None,
                 raw_body: Optional[str] = None,
                 request_id: Optional[str] = None,
                 code: ErrorCode = ErrorCode.REQUEST_FAILED,
                 cause: Optional[BaseException] = None):
        self.status_code = status_code
        self.messages = list(messages or [])
        self.field_errors = dict(field_errors or {})
        self.raw_body = raw_body
        self.request_id = request_id

        details: Dict[str, Any] = {"status_code": status_code}
        if self.field_errors:
            details["field_errors"] = self.field_errors
        if request_id:
            details["request_id"] = request_id
        super().__init__(message or f"HTTP {status_code}", code, details, cause)

    @property
    def is_rate_limited(self) -> bool:
        return self.code == ErrorCode.RATE_LIMITED

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500


class RateLimitedError(RequestFailedError):
    """HTTP 429 responses kept coming after every allowed retry."""

    def __init__(self, status_code: int = 429, message: Optional[str] = None,
                 attempts: int = 0, retry_after: Optional[float] = None, **kwargs: Any):
        super().__init__(status_code, message or "Rate limited", code=ErrorCode.RATE_LIMITED, **kwargs)
        self.attempts = attempts
        self.retry_after = retry_after
        self.details["attempts"] = attempts


def _as_message_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    return [str(value)]


def error_from_response(status_code: int, body: str,
                        headers: Optional[Mapping[str, str]] = None) -> RequestFailedError:
    """
    Create a ``RequestFailedError`` from a non-2xx response.

    Args:
        status_code: HTTP status code
        body: Raw response body text
        headers: Response headers (``X-Request-Id`` is attached when present)

    Returns:
        Error carrying the parsed message(s), or only the raw body text when
        the body does not follow the platform's error shape
    """
    request_id = None
    if headers is not None:
        request_id = headers.get("x-request-id")

    try:
        data = json.loads(body) if body and body.strip() else None
    except ValueError:
        data = None

    if not isinstance(data, dict):
        return RequestFailedError(status_code, raw_body=body, request_id=request_id)

    if "errors" in data:
        errors = data["errors"]
        if isinstance(errors, dict):
            field_errors = {str(field): _as_message_list(value) for field, value in errors.items()}
            message = "; ".join(
                f"{field}: {', '.join(messages)}" for field, messages in field_errors.items()
            )
            return RequestFailedError(status_code, message or None, field_errors=field_errors,
                                      raw_body=body, request_id=request_id)
        if isinstance(errors, (str, list)):
            messages = _as_message_list(errors)
            return RequestFailedError(status_code, "; ".join(messages) or None, messages=messages,
                                      raw_body=body, request_id=request_id)

    # OAuth-style errors: {"error": "invalid_request", "error_description": "..."}
    if isinstance(data.get("error"), str):
        message = data.get("error_description") or data["error"]
        return RequestFailedError(status_code, str(message), messages=[str(message)],
                                  raw_body=body, request_id=request_id)

    return RequestFailedError(status_code, raw_body=body, request_id=request_id)


class ErrorHandler:
    """
    Utility class for handling and categorizing errors.
    """

    @staticmethod
    def is_retryable(error: BaseException) -> bool:
        """
        Check if an error is worth retrying at a higher level.

        Args:
            error: Exception to check

        Returns:
            True for rate limiting, transport failures and server errors
        """
        if isinstance(error, RequestFailedError):
            return error.is_rate_limited or error.status_code == 429 or error.is_server_error
        if isinstance(error, TransportError):
            return True
        return False


__all__ = [
    "ErrorCode",
    "ShopifyError",
    "InvalidArgumentError",
    "ProtocolMismatchError",
    "TransportError",
    "ConnectionFailedError",
    "RequestTimeoutError",
    "RequestFailedError",
    "RateLimitedError",
    "error_from_response",
    "ErrorHandler",
]
