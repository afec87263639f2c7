# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Service Error Taxonomy

Purpose:
    Typed errors shared by the order, project and queue services. A backend
    raises them, the HTTP transport decodes them from error responses, and
    callers branch on their type.

Layer: domain/exceptions

Notes:
    Each class declares the HTTP status it travels with and the JSON body
    fields it carries. ``required_fields`` must be present in a decoded error
    body for it to be accepted.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from .base import DomainError

__all__ = [
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
]


class ServiceError(DomainError):
    """Base class for errors a service method may return."""

    code = "service-error"
    status_code: ClassVar[int] = 500
    body_fields: ClassVar[tuple[str, ...]] = ()
    required_fields: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> ServiceError:
        """Build the error from a decoded error body."""
        return cls(**{name: body.get(name) for name in cls.body_fields})

    def to_body(self) -> dict[str, Any]:
        """Return the JSON body shape for this error, omitting unset fields."""
        out: dict[str, Any] = {}
        for name in self.body_fields:
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_body() == other.to_body()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(sorted(self.to_body().items()))))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_body().items())
        return f"{type(self).__name__}({fields})"


class BadRequest(ServiceError):
    """Bad request."""

    code = "bad-request"
    status_code = 400
    body_fields = ("message",)
    required_fields = ("message",)

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "")


class Unauthorized(ServiceError):
    """Caller is not authorized."""

    code = "not-authorized"
    status_code = 401

    def __init__(self) -> None:
        super().__init__("not authorized")


class InvalidScopes(ServiceError):
    """Caller's token lacks the scopes the method requires.

    The error name of this error is its message.
    """

    code = "invalid-scopes"
    status_code = 403
    body_fields = ("id", "message")
    required_fields = ("message",)

    def __init__(self, message: str | None = None, id: str | None = None) -> None:  # noqa: A002
        super().__init__(message or "")
        self.id = id

    @property
    def error_name(self) -> str:
        return self.message


class InvalidParameter(ServiceError):
    """A request parameter is invalid."""

    code = "invalid-parameter"
    status_code = 422
    body_fields = ("name", "message", "value")
    required_fields = ("name", "message")

    def __init__(
        self,
        name: str | None = None,
        message: str | None = None,
        value: str | None = None,
    ) -> None:
        super().__init__(message or "")
        self.name = name or ""
        self.value = value


class ResourceNotFound(ServiceError):
    """Requested resource does not exist."""

    code = "not-found"
    status_code = 404
    body_fields = ("id", "message")
    required_fields = ("id", "message")

    def __init__(self, id: str | None = None, message: str | None = None) -> None:  # noqa: A002
        super().__init__(message or "")
        self.id = id or ""


class ResourceAlreadyCreated(ServiceError):
    """Resource with the same identity already exists."""

    code = "already-created"
    status_code = 409
    body_fields = ("id", "message")
    required_fields = ("id", "message")

    def __init__(self, id: str | None = None, message: str | None = None) -> None:  # noqa: A002
        super().__init__(message or "")
        self.id = id or ""


class ServiceNotImplemented(ServiceError):
    """Method is not implemented by the backend."""

    code = "not-implemented"
    status_code = 501
    body_fields = ("message",)
    required_fields = ("message",)

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "")


class ServiceNotAvailable(ServiceError):
    """Backend is temporarily unavailable."""

    code = "not-available"
    status_code = 503

    def __init__(self) -> None:
        super().__init__("service not available")


class InvalidCredentials(ServiceError):
    """Credentials could not be verified."""

    code = "invalid-credential"
    status_code = 401

    def __init__(self) -> None:
        super().__init__("invalid credentials")
