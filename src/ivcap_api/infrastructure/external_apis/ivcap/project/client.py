# src/ivcap_api/infrastructure/external_apis/ivcap/project/client.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Project HTTP client.

Implements :class:`ivcap_api.application.interfaces.project_service.ProjectService`
over HTTP. Mutations of memberships, the default project and the project
account answer ``204`` with no body and return ``None``.
"""

from __future__ import annotations

from typing import Final

from ivcap_api.application.interfaces import CallContext
from ivcap_api.application.payloads.project import (
    CreateProjectPayload,
    DefaultProjectPayload,
    DeletePayload,
    ListPayload,
    ListProjectMembersPayload,
    ProjectAccountPayload,
    ReadPayload,
    RemoveMembershipPayload,
    SetDefaultProjectPayload,
    SetProjectAccountPayload,
    UpdateMembershipPayload,
)
from ivcap_api.domain.entities.project import (
    ACCOUNT_VIEWS,
    MEMBERS_LIST_VIEWS,
    PROJECT_LIST_VIEWS,
    PROJECT_STATUS_VIEWS,
    AccountResult,
    MembersList,
    ProjectListRT,
    ProjectStatusRT,
)
from ivcap_api.infrastructure.external_apis.ivcap import paths
from ivcap_api.infrastructure.external_apis.ivcap.project.types import (
    CreateProjectRequestBody,
    MembersListBody,
    ProjectAccountBody,
    ProjectListBody,
    ProjectPropertiesBody,
    ProjectStatusBody,
    SetDefaultProjectRequestBody,
    SetProjectAccountRequestBody,
    UpdateMembershipRequestBody,
)
from ivcap_api.infrastructure.external_apis.ivcap.transport import (
    DELETE_ERRORS,
    LIST_ERRORS,
    LOOKUP_ERRORS,
    READ_ERRORS,
    IvcapHTTPClient,
    Operation,
    list_query,
)

__all__ = ["ProjectClient"]

SERVICE: Final[str] = "project"

_LIST = Operation(SERVICE, "list", "GET", 200, LIST_ERRORS, ProjectListBody, PROJECT_LIST_VIEWS)
_CREATE = Operation(
    SERVICE, "create_project", "POST", 200, LIST_ERRORS, ProjectStatusBody, PROJECT_STATUS_VIEWS
)
_DELETE = Operation(SERVICE, "delete", "DELETE", 204, DELETE_ERRORS)
_READ = Operation(
    SERVICE, "read", "GET", 200, READ_ERRORS, ProjectStatusBody, PROJECT_STATUS_VIEWS
)
_MEMBERS = Operation(
    SERVICE,
    "list_project_members",
    "GET",
    200,
    LOOKUP_ERRORS,
    MembersListBody,
    MEMBERS_LIST_VIEWS,
)
_UPDATE_MEMBERSHIP = Operation(SERVICE, "update_membership", "PUT", 204, LOOKUP_ERRORS)
_REMOVE_MEMBERSHIP = Operation(SERVICE, "remove_membership", "DELETE", 204, LOOKUP_ERRORS)
_DEFAULT = Operation(
    SERVICE, "default_project", "GET", 200, LOOKUP_ERRORS, ProjectStatusBody, PROJECT_STATUS_VIEWS
)
_SET_DEFAULT = Operation(SERVICE, "set_default_project", "PUT", 204, LOOKUP_ERRORS)
_ACCOUNT = Operation(
    SERVICE, "project_account", "GET", 200, LOOKUP_ERRORS, ProjectAccountBody, ACCOUNT_VIEWS
)
_SET_ACCOUNT = Operation(SERVICE, "set_project_account", "PUT", 204, LOOKUP_ERRORS)


class ProjectClient(IvcapHTTPClient):
    """HTTP client for the project service."""

    async def list(self, ctx: CallContext, payload: ListPayload) -> ProjectListRT:
        return await self._call(
            _LIST, paths.projects_path(), token=payload.jwt, params=list_query(payload)
        )

    async def create_project(
        self, ctx: CallContext, payload: CreateProjectPayload
    ) -> ProjectStatusRT:
        props = payload.properties
        body = CreateProjectRequestBody(
            name=payload.name,
            account_urn=payload.account_urn,
            parent_project_urn=payload.parent_project_urn,
            properties=ProjectPropertiesBody(details=props.details) if props else None,
        )
        return await self._call(
            _CREATE, paths.projects_path(), token=payload.jwt, json=body.to_wire()
        )

    async def delete(self, ctx: CallContext, payload: DeletePayload) -> None:
        await self._call(_DELETE, paths.project_path(payload.id), token=payload.jwt)

    async def read(self, ctx: CallContext, payload: ReadPayload) -> ProjectStatusRT:
        return await self._call(_READ, paths.project_path(payload.id), token=payload.jwt)

    async def list_project_members(
        self, ctx: CallContext, payload: ListProjectMembersPayload
    ) -> MembersList:
        params: dict[str, str] = {}
        if payload.role is not None:
            params["role"] = payload.role
        params["limit"] = str(payload.limit)
        if payload.page is not None:
            params["page"] = payload.page
        return await self._call(
            _MEMBERS, paths.project_members_path(payload.urn), token=payload.jwt, params=params
        )

    async def update_membership(
        self, ctx: CallContext, payload: UpdateMembershipPayload
    ) -> None:
        body = UpdateMembershipRequestBody(role=payload.role)
        await self._call(
            _UPDATE_MEMBERSHIP,
            paths.project_membership_path(payload.project_urn, payload.user_urn),
            token=payload.jwt,
            json=body.to_wire(),
        )

    async def remove_membership(
        self, ctx: CallContext, payload: RemoveMembershipPayload
    ) -> None:
        await self._call(
            _REMOVE_MEMBERSHIP,
            paths.project_membership_path(payload.project_urn, payload.user_urn),
            token=payload.jwt,
        )

    async def default_project(
        self, ctx: CallContext, payload: DefaultProjectPayload
    ) -> ProjectStatusRT:
        return await self._call(_DEFAULT, paths.default_project_path(), token=payload.jwt)

    async def set_default_project(
        self, ctx: CallContext, payload: SetDefaultProjectPayload
    ) -> None:
        body = SetDefaultProjectRequestBody(
            project_urn=payload.project_urn, user_urn=payload.user_urn
        )
        await self._call(
            _SET_DEFAULT, paths.default_project_path(), token=payload.jwt, json=body.to_wire()
        )

    async def project_account(
        self, ctx: CallContext, payload: ProjectAccountPayload
    ) -> AccountResult:
        return await self._call(
            _ACCOUNT, paths.project_account_path(payload.project_urn), token=payload.jwt
        )

    async def set_project_account(
        self, ctx: CallContext, payload: SetProjectAccountPayload
    ) -> None:
        body = SetProjectAccountRequestBody(account_urn=payload.account_urn)
        await self._call(
            _SET_ACCOUNT,
            paths.project_account_path(payload.project_urn),
            token=payload.jwt,
            json=body.to_wire(),
        )
