# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Project Wire Schemas

Purpose:
    JSON bodies of the project endpoints. Project timestamps travel as
    ``created_at``/``modified_at`` while listing cursors use ``at-time``.
"""
from __future__ import annotations

from pydantic import Field

from ivcap_api.infrastructure.external_apis.ivcap.wire import WireModel

__all__ = [
    "ProjectPropertiesBody",
    "CreateProjectRequestBody",
    "UpdateMembershipRequestBody",
    "SetDefaultProjectRequestBody",
    "SetProjectAccountRequestBody",
    "ProjectStatusBody",
    "ProjectListItemBody",
    "ProjectListBody",
    "UserListItemBody",
    "MembersListBody",
    "ProjectAccountBody",
]


class ProjectPropertiesBody(WireModel):
    details: str | None = None


# ------------------------------ Request bodies ------------------------------ #


class CreateProjectRequestBody(WireModel):
    name: str = ""
    account_urn: str | None = None
    parent_project_urn: str | None = None
    properties: ProjectPropertiesBody | None = None


class UpdateMembershipRequestBody(WireModel):
    role: str = ""


class SetDefaultProjectRequestBody(WireModel):
    project_urn: str = ""
    user_urn: str | None = None


class SetProjectAccountRequestBody(WireModel):
    account_urn: str = ""


# ----------------------------- Response bodies ----------------------------- #


class ProjectStatusBody(WireModel):
    """Body of ``create_project``, ``read`` and ``default_project``."""

    urn: str | None = None
    name: str | None = None
    account: str | None = None
    parent: str | None = None
    status: str | None = None
    created_at: str | None = None
    modified_at: str | None = None
    properties: ProjectPropertiesBody | None = None


class ProjectListItemBody(WireModel):
    name: str | None = None
    role: str | None = None
    urn: str | None = None
    created_at: str | None = None
    modified_at: str | None = None
    at_time: str | None = Field(None, alias="at-time")


class ProjectListBody(WireModel):
    projects: list[ProjectListItemBody] | None = None
    at_time: str | None = Field(None, alias="at-time")
    page: str | None = None


class UserListItemBody(WireModel):
    urn: str | None = None
    email: str | None = None
    role: str | None = None


class MembersListBody(WireModel):
    members: list[UserListItemBody] | None = None
    page: str | None = None
    at_time: str | None = Field(None, alias="at-time")


class ProjectAccountBody(WireModel):
    account_urn: str | None = None
