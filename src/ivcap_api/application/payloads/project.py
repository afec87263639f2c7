# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Project Payloads

Purpose:
    Typed inputs of the project service methods.

Layer: application/payloads
"""
from __future__ import annotations

from dataclasses import dataclass

from ivcap_api.domain.entities.project import ProjectProperties

__all__ = [
    "ListPayload",
    "CreateProjectPayload",
    "DeletePayload",
    "ReadPayload",
    "ListProjectMembersPayload",
    "UpdateMembershipPayload",
    "RemoveMembershipPayload",
    "DefaultProjectPayload",
    "SetDefaultProjectPayload",
    "ProjectAccountPayload",
    "SetProjectAccountPayload",
]


@dataclass(frozen=True, slots=True)
class ListPayload:
    """Page through the caller's projects."""

    limit: int = 10
    page: str | None = None
    filter: str | None = None
    order_by: str | None = None
    order_desc: bool = False
    at_time: str | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class CreateProjectPayload:
    """Create a project, optionally under a parent and billed to an account."""

    name: str = ""
    account_urn: str | None = None
    parent_project_urn: str | None = None
    properties: ProjectProperties | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class DeletePayload:
    id: str = ""
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class ReadPayload:
    id: str = ""
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class ListProjectMembersPayload:
    """Page through a project's members, optionally filtered by role."""

    urn: str = ""
    role: str | None = None
    limit: int = 10
    page: str | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class UpdateMembershipPayload:
    """Add a user to a project, or change their role."""

    project_urn: str = ""
    user_urn: str = ""
    role: str = ""
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class RemoveMembershipPayload:
    project_urn: str = ""
    user_urn: str = ""
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class DefaultProjectPayload:
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class SetDefaultProjectPayload:
    """Set the default project of ``user_urn`` (the caller when omitted)."""

    project_urn: str = ""
    user_urn: str | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class ProjectAccountPayload:
    project_urn: str = ""
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class SetProjectAccountPayload:
    project_urn: str = ""
    account_urn: str = ""
    jwt: str = ""
