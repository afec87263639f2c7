# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Scope Requirements (Application Layer).

Purpose:
    Static map from ``(service, method)`` to the OAuth-style scopes a caller's
    token must carry. Reads need ``consumer:read`` and most mutations need
    ``consumer:write``; membership changes only need ``consumer:read``. The
    superset every token may carry is the same for all methods.

Layer:
    application
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

__all__ = [
    "READ_SCOPE",
    "WRITE_SCOPE",
    "ScopeRequirement",
    "SCOPE_REQUIREMENTS",
    "requirement_for",
]

READ_SCOPE: Final[str] = "consumer:read"
WRITE_SCOPE: Final[str] = "consumer:write"


@dataclass(frozen=True, slots=True)
class ScopeRequirement:
    """Scopes a method requires, out of the scopes a token may carry.

    Attributes:
        scopes: Every scope the API defines.
        required_scopes: Scopes the caller must hold for this method.
    """

    scopes: tuple[str, ...]
    required_scopes: tuple[str, ...]


_ALL: Final[tuple[str, ...]] = (READ_SCOPE, WRITE_SCOPE)
_READ: Final[ScopeRequirement] = ScopeRequirement(scopes=_ALL, required_scopes=(READ_SCOPE,))
_WRITE: Final[ScopeRequirement] = ScopeRequirement(scopes=_ALL, required_scopes=(WRITE_SCOPE,))

SCOPE_REQUIREMENTS: Final[Mapping[tuple[str, str], ScopeRequirement]] = MappingProxyType(
    {
        ("order", "list"): _READ,
        ("order", "read"): _READ,
        ("order", "create"): _WRITE,
        ("order", "products"): _READ,
        ("order", "metadata"): _READ,
        ("order", "logs"): _READ,
        ("order", "top"): _READ,
        ("project", "list"): _READ,
        ("project", "create_project"): _WRITE,
        ("project", "delete"): _WRITE,
        ("project", "read"): _READ,
        ("project", "list_project_members"): _READ,
        ("project", "update_membership"): _READ,
        ("project", "remove_membership"): _READ,
        ("project", "default_project"): _READ,
        ("project", "set_default_project"): _WRITE,
        ("project", "project_account"): _READ,
        ("project", "set_project_account"): _WRITE,
        ("queue", "create"): _WRITE,
        ("queue", "read"): _READ,
        ("queue", "delete"): _WRITE,
        ("queue", "list"): _READ,
        ("queue", "enqueue"): _WRITE,
        ("queue", "dequeue"): _READ,
    }
)


def requirement_for(service: str, method: str) -> ScopeRequirement:
    """Return the scope requirement of a method.

    Raises:
        KeyError: If the method is unknown.
    """
    return SCOPE_REQUIREMENTS[(service, method)]
