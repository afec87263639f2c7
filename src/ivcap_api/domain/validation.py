# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Field Validation Helpers (Domain Layer).

Purpose:
    Small, pure checks used by response validation and the CLI payload
    builders: required presence, string formats (URI, UUID, RFC3339
    date-time), enumeration membership and integer ranges.

Layer:
    domain

Notes:
    Checks return a :class:`FieldViolation` (or ``None``) instead of raising.
    Callers gather them in a :class:`Violations` collector and raise once, so
    every problem is reported together.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from datetime import datetime
from enum import Enum
from typing import Any

from ivcap_api.domain.exceptions.validation import FieldViolation, ValidationError

__all__ = [
    "Format",
    "Violations",
    "missing_field",
    "invalid_field_type",
    "check_format",
    "check_enum",
    "check_range",
    "is_valid_format",
]


class Format(str, Enum):
    """Supported string formats."""

    URI = "uri"
    UUID = "uuid"
    DATE_TIME = "date-time"


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_RFC3339_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+\-]\d{2}:\d{2})"
)


def _is_uri(value: str) -> bool:
    # Absolute URI (any scheme, including opaque ``urn:``) or absolute path.
    if not value or any(ch.isspace() for ch in value):
        return False
    if value.startswith("/"):
        return True
    match = _SCHEME_RE.match(value)
    return match is not None and len(value) > match.end()


def _is_date_time(value: str) -> bool:
    if not _RFC3339_RE.fullmatch(value):
        return False
    try:
        datetime.fromisoformat(value.upper().replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def is_valid_format(value: str, fmt: Format) -> bool:
    """Return True if ``value`` satisfies ``fmt``."""
    if fmt is Format.URI:
        return _is_uri(value)
    if fmt is Format.UUID:
        return bool(_UUID_RE.fullmatch(value))
    return _is_date_time(value)


def missing_field(name: str, context: str) -> FieldViolation:
    """Violation for a required field absent from ``context``."""
    return FieldViolation(
        name=f"{context}.{name}",
        kind="missing_field",
        message=f'"{name}" is missing from {context}',
    )


def invalid_field_type(name: str, value: Any, expected: str) -> FieldViolation:
    """Violation for a value of the wrong type."""
    return FieldViolation(
        name=name,
        kind="invalid_field_type",
        message=f"invalid value {value!r} for {name}, must be a {expected}",
    )


def check_format(name: str, value: str, fmt: Format) -> FieldViolation | None:
    """Check ``value`` against a string format."""
    if isinstance(value, str) and is_valid_format(value, fmt):
        return None
    return FieldViolation(
        name=name,
        kind="invalid_format",
        message=f'{name} must be formatted as a {fmt.value} but got value "{value}"',
    )


def check_enum(name: str, value: Any, allowed: Sequence[Any]) -> FieldViolation | None:
    """Check that ``value`` is one of ``allowed``."""
    if value in allowed:
        return None
    choices = ", ".join(f'"{a}"' for a in allowed)
    return FieldViolation(
        name=name,
        kind="invalid_enum_value",
        message=f'value of {name} must be one of {choices} but got value "{value}"',
    )


def check_range(
    name: str, value: int, *, minimum: int | None = None, maximum: int | None = None
) -> FieldViolation | None:
    """Check an integer against inclusive bounds."""
    if minimum is not None and value < minimum:
        return FieldViolation(
            name=name,
            kind="invalid_range",
            message=f"{name} must be greater or equal than {minimum} but got value {value}",
        )
    if maximum is not None and value > maximum:
        return FieldViolation(
            name=name,
            kind="invalid_range",
            message=f"{name} must be lesser or equal than {maximum} but got value {value}",
        )
    return None


class Violations:
    """Collector that merges violations and raises them as one error."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[FieldViolation] = []

    def add(self, violation: FieldViolation | None) -> None:
        if violation is not None:
            self._items.append(violation)

    def extend(self, violations: Iterable[FieldViolation]) -> None:
        self._items.extend(violations)

    def merge(self, error: ValidationError | None) -> None:
        if error is not None:
            self._items.extend(error.violations)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def error(self) -> ValidationError | None:
        """Return the merged error, or ``None`` when nothing was collected."""
        return ValidationError(self._items) if self._items else None

    def raise_if_any(self) -> None:
        """Raise :class:`ValidationError` if anything was collected."""
        err = self.error()
        if err is not None:
            raise err
