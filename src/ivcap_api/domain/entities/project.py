# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Project Entities

Purpose:
    Result types returned by the project service, with their view tables.

Layer: domain/entities

Notes:
    ``ProjectStatusRT`` and ``ProjectListRT`` declare ``default`` and ``tiny``
    views. A ``tiny`` project list carries ``tiny`` items (urn only).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from ivcap_api.domain.validation import Format
from ivcap_api.domain.views import DEFAULT_VIEW, FieldRule, ResultView

__all__ = [
    "ProjectStatus",
    "ProjectProperties",
    "ProjectStatusRT",
    "ProjectListItem",
    "ProjectListRT",
    "UserListItem",
    "MembersList",
    "AccountResult",
    "PROJECT_STATUS_VIEWS",
    "PROJECT_LIST_VIEWS",
    "MEMBERS_LIST_VIEWS",
    "ACCOUNT_VIEWS",
]

TINY_VIEW: Final[str] = "tiny"


class ProjectStatus(str, Enum):
    """Lifecycle state of a project."""

    UNKNOWN = "unknown"
    ACTIVE = "active"
    DISABLED = "disabled"
    DELETED = "deleted"


_STATUSES: Final[tuple[str, ...]] = tuple(s.value for s in ProjectStatus)
_DEFAULT: Final[tuple[str, ...]] = (DEFAULT_VIEW,)


@dataclass(frozen=True, slots=True)
class ProjectProperties:
    """Free-form project properties."""

    details: str | None = None


@dataclass(frozen=True, slots=True)
class ProjectStatusRT:
    """Status of a single project."""

    urn: str = ""
    name: str | None = None
    account: str | None = None
    parent: str | None = None
    status: str | None = None
    created_at: str | None = None
    modified_at: str | None = None
    properties: ProjectProperties | None = None


@dataclass(frozen=True, slots=True)
class ProjectListItem:
    """Summary row of a project listing, including the caller's role."""

    name: str | None = None
    role: str | None = None
    urn: str | None = None
    created_at: str | None = None
    modified_at: str | None = None
    at_time: str | None = None


@dataclass(frozen=True, slots=True)
class ProjectListRT:
    """Page of projects."""

    projects: list[ProjectListItem] = field(default_factory=list)
    at_time: str | None = None
    page: str | None = None


@dataclass(frozen=True, slots=True)
class UserListItem:
    """Project member."""

    urn: str | None = None
    email: str | None = None
    role: str | None = None


@dataclass(frozen=True, slots=True)
class MembersList:
    """Page of project members."""

    members: list[UserListItem] = field(default_factory=list)
    page: str | None = None
    at_time: str | None = None


@dataclass(frozen=True, slots=True)
class AccountResult:
    """Billing account attached to a project."""

    account_urn: str = ""


# ------------------------------- View tables ------------------------------- #

PROPERTIES_VIEWS: Final[ResultView] = ResultView(
    type_name="ProjectProperties",
    result_cls=ProjectProperties,
    views={DEFAULT_VIEW: ("details",)},
    rules=(FieldRule("details"),),
)

PROJECT_STATUS_VIEWS: Final[ResultView] = ResultView(
    type_name="ProjectStatusRT",
    result_cls=ProjectStatusRT,
    views={
        DEFAULT_VIEW: (
            "urn",
            "name",
            "account",
            "parent",
            "status",
            "created_at",
            "modified_at",
            "properties",
        ),
        TINY_VIEW: ("name", "status"),
    },
    rules=(
        FieldRule("urn", required=_DEFAULT, format=Format.URI),
        FieldRule("name"),
        FieldRule("account", format=Format.URI),
        FieldRule("parent", format=Format.URI),
        FieldRule("status", enum=_STATUSES),
        FieldRule("created_at", format=Format.DATE_TIME),
        FieldRule("modified_at", format=Format.DATE_TIME),
        FieldRule("properties", nested=PROPERTIES_VIEWS),
    ),
)

PROJECT_LIST_ITEM_VIEWS: Final[ResultView] = ResultView(
    type_name="ProjectListItem",
    result_cls=ProjectListItem,
    views={
        DEFAULT_VIEW: ("name", "role", "urn", "created_at", "modified_at", "at_time"),
        TINY_VIEW: ("urn",),
    },
    rules=(
        FieldRule("name"),
        FieldRule("role"),
        FieldRule("urn"),
        FieldRule("created_at", format=Format.DATE_TIME),
        FieldRule("modified_at", format=Format.DATE_TIME),
        FieldRule("at_time", wire="at-time", format=Format.DATE_TIME),
    ),
)

PROJECT_LIST_VIEWS: Final[ResultView] = ResultView(
    type_name="ProjectListRT",
    result_cls=ProjectListRT,
    views={
        DEFAULT_VIEW: ("projects", "at_time", "page"),
        TINY_VIEW: ("projects", "at_time", "page"),
    },
    rules=(
        FieldRule("projects", nested=PROJECT_LIST_ITEM_VIEWS),
        FieldRule("at_time", wire="at-time", format=Format.DATE_TIME),
        FieldRule("page"),
    ),
)

USER_VIEWS: Final[ResultView] = ResultView(
    type_name="UserListItem",
    result_cls=UserListItem,
    views={DEFAULT_VIEW: ("urn", "email", "role")},
    rules=(FieldRule("urn"), FieldRule("email"), FieldRule("role")),
)

MEMBERS_LIST_VIEWS: Final[ResultView] = ResultView(
    type_name="MembersList",
    result_cls=MembersList,
    views={DEFAULT_VIEW: ("members", "page", "at_time")},
    rules=(
        FieldRule("members", required=_DEFAULT, nested=USER_VIEWS),
        FieldRule("page"),
        FieldRule("at_time", wire="at-time", format=Format.DATE_TIME),
    ),
)

ACCOUNT_VIEWS: Final[ResultView] = ResultView(
    type_name="AccountResult",
    result_cls=AccountResult,
    views={DEFAULT_VIEW: ("account_urn",)},
    rules=(FieldRule("account_urn", required=_DEFAULT, format=Format.URI),),
)
