# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Transport Exceptions

Purpose:
    Failures of a single HTTP call that are not typed service errors:
    unusable bodies, network failures and unexpected status codes. Each error
    names the service and method it came from.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError
from .validation import FieldViolation, ValidationError

__all__ = [
    "TransportError",
    "DecodingError",
    "ResponseValidationError",
    "RequestError",
    "InvalidResponseError",
    "InvalidPayloadTypeError",
]


class TransportError(DomainError):
    """Base class for call-level transport failures."""

    code = "transport-error"

    def __init__(self, service: str, method: str, message: str) -> None:
        super().__init__(
            f"{service}.{method}: {message}", details={"service": service, "method": method}
        )
        self.service = service
        self.method = method


class DecodingError(TransportError):
    """Response body is not valid JSON or has the wrong shape."""

    code = "decoding-error"

    def __init__(self, service: str, method: str, reason: str) -> None:
        super().__init__(service, method, f"failed to decode response body: {reason}")
        self.reason = reason


class ResponseValidationError(TransportError):
    """Decoded response body failed field validation."""

    code = "validation-error"

    def __init__(self, service: str, method: str, error: ValidationError) -> None:
        super().__init__(service, method, f"invalid response body: {error.message}")
        self.violations: tuple[FieldViolation, ...] = error.violations


class RequestError(TransportError):
    """The HTTP round-trip itself failed (connect, read, timeout, ...)."""

    code = "request-error"

    def __init__(self, service: str, method: str, reason: str) -> None:
        super().__init__(service, method, f"request failed: {reason}")
        self.reason = reason


class InvalidResponseError(TransportError):
    """Server replied with a status code the method does not document."""

    code = "invalid-response"

    def __init__(self, service: str, method: str, status_code: int, body: str) -> None:
        super().__init__(service, method, f"unexpected status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class InvalidPayloadTypeError(DomainError, TypeError):
    """Endpoint received a payload of the wrong type (programming error)."""

    code = "invalid-type"

    def __init__(self, service: str, method: str, expected: str, got: object) -> None:
        super().__init__(f"{service}.{method}: expected {expected}, got {type(got).__name__}")
        self.service = service
        self.method = method
