# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Application Interface: Project Service.

Synopsis:
    Methods a backend exposes for projects, their members and their billing
    account.

Layer:
    application/interfaces
"""

from __future__ import annotations

from typing import Protocol

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
    AccountResult,
    MembersList,
    ProjectListRT,
    ProjectStatusRT,
)


class ProjectService(Protocol):
    """Manage projects."""

    async def list(self, ctx: CallContext, payload: ListPayload) -> ProjectListRT: ...

    async def create_project(
        self, ctx: CallContext, payload: CreateProjectPayload
    ) -> ProjectStatusRT: ...

    async def delete(self, ctx: CallContext, payload: DeletePayload) -> None: ...

    async def read(self, ctx: CallContext, payload: ReadPayload) -> ProjectStatusRT: ...

    async def list_project_members(
        self, ctx: CallContext, payload: ListProjectMembersPayload
    ) -> MembersList: ...

    async def update_membership(self, ctx: CallContext, payload: UpdateMembershipPayload) -> None:
        """Add ``user_urn`` to the project or change its role."""

    async def remove_membership(self, ctx: CallContext, payload: RemoveMembershipPayload) -> None:
        """Remove ``user_urn`` from the project."""

    async def default_project(
        self, ctx: CallContext, payload: DefaultProjectPayload
    ) -> ProjectStatusRT: ...

    async def set_default_project(
        self, ctx: CallContext, payload: SetDefaultProjectPayload
    ) -> None: ...

    async def project_account(
        self, ctx: CallContext, payload: ProjectAccountPayload
    ) -> AccountResult: ...

    async def set_project_account(
        self, ctx: CallContext, payload: SetProjectAccountPayload
    ) -> None: ...
