# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Project Payload Builders

Purpose:
    Turn command-line flag strings into project payloads. URNs are checked
    to be URIs and page sizes to lie in 1..50.
"""
from __future__ import annotations

from typing import Final

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
from ivcap_api.domain.entities.project import ProjectProperties
from ivcap_api.domain.validation import Format, Violations, check_format
from ivcap_api.infrastructure.external_apis.ivcap.flags import (
    optional,
    parse_body,
    parse_bool,
    parse_limit,
)
from ivcap_api.infrastructure.external_apis.ivcap.project.types import (
    CreateProjectRequestBody,
    SetDefaultProjectRequestBody,
    SetProjectAccountRequestBody,
    UpdateMembershipRequestBody,
)

__all__ = [
    "build_list_payload",
    "build_create_project_payload",
    "build_delete_payload",
    "build_read_payload",
    "build_list_project_members_payload",
    "build_update_membership_payload",
    "build_remove_membership_payload",
    "build_default_project_payload",
    "build_set_default_project_payload",
    "build_project_account_payload",
    "build_set_project_account_payload",
]

CREATE_PROJECT_EXAMPLE: Final[str] = (
    '{"account_urn": "urn:ivcap:account:146d4ac9-244a-4aee-aa32-a28f4b91e60d", '
    '"name": "My project name", '
    '"parent_project_urn": "urn:ivcap:project:8a82775b-27d9-4635-b006-7ef5553656d1", '
    '"properties": {"details": "Created for to investigate [objective]"}}'
)
UPDATE_MEMBERSHIP_EXAMPLE: Final[str] = '{"role": "owner"}'
SET_DEFAULT_PROJECT_EXAMPLE: Final[str] = (
    '{"project_urn": "urn:ivcap:project:59c76bc8-721b-409d-8a32-6d560680e89f", '
    '"user_urn": "urn:ivcap:user:0b755f67-4d03-4d82-b208-4d6a0ae16468"}'
)
SET_PROJECT_ACCOUNT_EXAMPLE: Final[str] = (
    '{"account_urn": "urn:ivcap:account:146d4ac9-244a-4aee-aa32-a28f4b91e60d"}'
)


def build_list_payload(
    limit: str = "",
    page: str = "",
    filter: str = "",  # noqa: A002
    order_by: str = "",
    order_desc: str = "",
    at_time: str = "",
    jwt: str = "",
) -> ListPayload:
    errs = Violations()
    parsed_limit = parse_limit(limit, errs)
    desc = parse_bool(order_desc, "orderDesc") if order_desc else False
    if at_time:
        errs.add(check_format("at-time", at_time, Format.DATE_TIME))
    errs.raise_if_any()
    return ListPayload(
        limit=parsed_limit,
        page=optional(page),
        filter=optional(filter),
        order_by=optional(order_by),
        order_desc=desc,
        at_time=optional(at_time),
        jwt=jwt,
    )


def build_create_project_payload(body: str, jwt: str = "") -> CreateProjectPayload:
    req = parse_body(body, CreateProjectRequestBody, CREATE_PROJECT_EXAMPLE)
    errs = Violations()
    if req.account_urn is not None:
        errs.add(check_format("body.account_urn", req.account_urn, Format.URI))
    if req.parent_project_urn is not None:
        errs.add(check_format("body.parent_project_urn", req.parent_project_urn, Format.URI))
    errs.raise_if_any()
    props = req.properties
    return CreateProjectPayload(
        name=req.name,
        account_urn=req.account_urn,
        parent_project_urn=req.parent_project_urn,
        properties=ProjectProperties(details=props.details) if props is not None else None,
        jwt=jwt,
    )


def build_delete_payload(id: str, jwt: str = "") -> DeletePayload:  # noqa: A002
    return DeletePayload(id=id, jwt=jwt)


def build_read_payload(id: str, jwt: str = "") -> ReadPayload:  # noqa: A002
    return ReadPayload(id=id, jwt=jwt)


def build_list_project_members_payload(
    urn: str, role: str = "", limit: str = "", page: str = "", jwt: str = ""
) -> ListProjectMembersPayload:
    errs = Violations()
    errs.add(check_format("urn", urn, Format.URI))
    parsed_limit = parse_limit(limit, errs)
    errs.raise_if_any()
    return ListProjectMembersPayload(
        urn=urn, role=optional(role), limit=parsed_limit, page=optional(page), jwt=jwt
    )


def _membership_refs(project_urn: str, user_urn: str) -> None:
    errs = Violations()
    errs.add(check_format("project_urn", project_urn, Format.URI))
    errs.add(check_format("user_urn", user_urn, Format.URI))
    errs.raise_if_any()


def build_update_membership_payload(
    body: str, project_urn: str, user_urn: str, jwt: str = ""
) -> UpdateMembershipPayload:
    req = parse_body(body, UpdateMembershipRequestBody, UPDATE_MEMBERSHIP_EXAMPLE)
    _membership_refs(project_urn, user_urn)
    return UpdateMembershipPayload(
        project_urn=project_urn, user_urn=user_urn, role=req.role, jwt=jwt
    )


def build_remove_membership_payload(
    project_urn: str, user_urn: str, jwt: str = ""
) -> RemoveMembershipPayload:
    _membership_refs(project_urn, user_urn)
    return RemoveMembershipPayload(project_urn=project_urn, user_urn=user_urn, jwt=jwt)


def build_default_project_payload(jwt: str = "") -> DefaultProjectPayload:
    return DefaultProjectPayload(jwt=jwt)


def build_set_default_project_payload(body: str, jwt: str = "") -> SetDefaultProjectPayload:
    req = parse_body(body, SetDefaultProjectRequestBody, SET_DEFAULT_PROJECT_EXAMPLE)
    errs = Violations()
    errs.add(check_format("body.project_urn", req.project_urn, Format.URI))
    if req.user_urn is not None:
        errs.add(check_format("body.user_urn", req.user_urn, Format.URI))
    errs.raise_if_any()
    return SetDefaultProjectPayload(project_urn=req.project_urn, user_urn=req.user_urn, jwt=jwt)


def build_project_account_payload(project_urn: str, jwt: str = "") -> ProjectAccountPayload:
    errs = Violations()
    errs.add(check_format("project_urn", project_urn, Format.URI))
    errs.raise_if_any()
    return ProjectAccountPayload(project_urn=project_urn, jwt=jwt)


def build_set_project_account_payload(
    body: str, project_urn: str, jwt: str = ""
) -> SetProjectAccountPayload:
    req = parse_body(body, SetProjectAccountRequestBody, SET_PROJECT_ACCOUNT_EXAMPLE)
    errs = Violations()
    errs.add(check_format("body.account_urn", req.account_urn, Format.URI))
    errs.add(check_format("project_urn", project_urn, Format.URI))
    errs.raise_if_any()
    return SetProjectAccountPayload(
        project_urn=project_urn, account_urn=req.account_urn, jwt=jwt
    )
