# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Validation Exceptions

Purpose:
    Aggregated field validation failures. Violations are collected, never
    short-circuited, and surfaced as one error carrying all of them.

Layer: domain/exceptions
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .base import DomainError

__all__ = ["FieldViolation", "ValidationError", "PayloadBuildError"]


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """One failed field check.

    Attributes:
        name: Qualified field name (for example ``body.status``).
        kind: One of ``missing_field``, ``invalid_format``,
            ``invalid_enum_value``, ``invalid_range``, ``invalid_field_type``.
        message: Human-readable description.
    """

    name: str
    kind: str
    message: str


class ValidationError(DomainError):
    """One or more field violations."""

    code = "invalid-field"

    def __init__(self, violations: Iterable[FieldViolation]) -> None:
        self.violations: tuple[FieldViolation, ...] = tuple(violations)
        super().__init__("; ".join(v.message for v in self.violations))

    @property
    def kinds(self) -> set[str]:
        """Return the distinct violation kinds."""
        return {v.kind for v in self.violations}

    @property
    def names(self) -> list[str]:
        """Return the offending field names in report order."""
        return [v.name for v in self.violations]


class PayloadBuildError(DomainError):
    """Command-line flag values could not be turned into a payload."""

    code = "invalid-flag"
