# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Domain exceptions package."""

from __future__ import annotations

from .base import DomainError
from .service import (
    BadRequest,
    InvalidCredentials,
    InvalidParameter,
    InvalidScopes,
    ResourceAlreadyCreated,
    ResourceNotFound,
    ServiceError,
    ServiceNotAvailable,
    ServiceNotImplemented,
    Unauthorized,
)
from .transport import (
    DecodingError,
    InvalidPayloadTypeError,
    InvalidResponseError,
    RequestError,
    ResponseValidationError,
    TransportError,
)
from .validation import FieldViolation, PayloadBuildError, ValidationError

__all__ = [
    "DomainError",
    "ServiceError",
    "BadRequest",
    "Unauthorized",
    "InvalidScopes",
    "InvalidParameter",
    "ResourceNotFound",
    "ResourceAlreadyCreated",
    "ServiceNotImplemented",
    "ServiceNotAvailable",
    "InvalidCredentials",
    "TransportError",
    "DecodingError",
    "ResponseValidationError",
    "RequestError",
    "InvalidResponseError",
    "InvalidPayloadTypeError",
    "FieldViolation",
    "ValidationError",
    "PayloadBuildError",
]
