# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Order Entities

Purpose:
    Result types returned by the order service, with their view tables.

Layer: domain/entities

Notes:
    ``OrderStatusRT`` declares ``default`` and ``tiny`` views. Every other
    order result has a single ``default`` view.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from ivcap_api.domain.entities.common import LINK_VIEWS, Link
from ivcap_api.domain.validation import Format
from ivcap_api.domain.views import DEFAULT_VIEW, FieldRule, ResultView

__all__ = [
    "OrderStatus",
    "Parameter",
    "ProductListItem",
    "PartialProductList",
    "OrderMetadataListItem",
    "PartialMetaList",
    "OrderStatusRT",
    "OrderListItem",
    "OrderListRT",
    "OrderTopResultItem",
    "ORDER_STATUS_VIEWS",
    "ORDER_LIST_VIEWS",
    "ORDER_TOP_VIEWS",
    "META_LIST_VIEWS",
]


class OrderStatus(str, Enum):
    """Lifecycle state of an order."""

    UNKNOWN = "unknown"
    PENDING = "pending"
    SCHEDULED = "scheduled"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERROR = "error"


_STATUSES: Final[tuple[str, ...]] = tuple(s.value for s in OrderStatus)
_DEFAULT: Final[tuple[str, ...]] = (DEFAULT_VIEW,)


@dataclass(frozen=True, slots=True)
class Parameter:
    """Service parameter as a name/value pair."""

    name: str | None = None
    value: str | None = None


@dataclass(frozen=True, slots=True)
class ProductListItem:
    """Product produced by an order."""

    id: str = ""
    name: str | None = None
    status: str = ""
    mime_type: str | None = None
    size: int | None = None
    href: str = ""
    data_href: str | None = None


@dataclass(frozen=True, slots=True)
class PartialProductList:
    """One page of an order's products."""

    items: list[ProductListItem] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class OrderMetadataListItem:
    """Metadata record attached to an order."""

    id: str = ""
    schema: str = ""
    href: str = ""
    content_type: str = ""


@dataclass(frozen=True, slots=True)
class PartialMetaList:
    """One page of an order's metadata."""

    items: list[OrderMetadataListItem] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class OrderStatusRT:
    """Status of a single order."""

    id: str = ""
    name: str | None = None
    status: str = ""
    ordered_at: str | None = None
    started_at: str | None = None
    finished_at: str | None = None
    products: PartialProductList | None = None
    service: str = ""
    account: str = ""
    links: list[Link] = field(default_factory=list)
    tags: list[str] | None = None
    parameters: list[Parameter] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class OrderListItem:
    """Summary row of an order listing."""

    id: str = ""
    name: str | None = None
    status: str = ""
    ordered_at: str | None = None
    started_at: str | None = None
    finished_at: str | None = None
    service: str = ""
    account: str = ""
    href: str = ""


@dataclass(frozen=True, slots=True)
class OrderListRT:
    """Page of orders."""

    items: list[OrderListItem] = field(default_factory=list)
    at_time: str = ""
    links: list[Link] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class OrderTopResultItem:
    """Resource usage of one container running an order."""

    container: str = ""
    cpu: str = ""
    memory: str = ""
    storage: str = ""
    ephemeral_storage: str = ""


# ------------------------------- View tables ------------------------------- #

PARAMETER_VIEWS: Final[ResultView] = ResultView(
    type_name="ParameterT",
    result_cls=Parameter,
    views={DEFAULT_VIEW: ("name", "value")},
    rules=(FieldRule("name"), FieldRule("value")),
)

PRODUCT_ITEM_VIEWS: Final[ResultView] = ResultView(
    type_name="ProductListItemT",
    result_cls=ProductListItem,
    views={DEFAULT_VIEW: ("id", "name", "status", "mime_type", "size", "href", "data_href")},
    rules=(
        FieldRule("id", required=_DEFAULT),
        FieldRule("name"),
        FieldRule("status", required=_DEFAULT),
        FieldRule("mime_type", wire="mime-type"),
        FieldRule("size"),
        FieldRule("href", required=_DEFAULT),
        FieldRule("data_href", wire="dataRef"),
    ),
)

PRODUCT_LIST_VIEWS: Final[ResultView] = ResultView(
    type_name="PartialProductListT",
    result_cls=PartialProductList,
    views={DEFAULT_VIEW: ("items", "links")},
    rules=(
        FieldRule("items", required=_DEFAULT, nested=PRODUCT_ITEM_VIEWS),
        FieldRule("links", required=_DEFAULT, nested=LINK_VIEWS),
    ),
)

ORDER_STATUS_VIEWS: Final[ResultView] = ResultView(
    type_name="OrderStatusRT",
    result_cls=OrderStatusRT,
    views={
        DEFAULT_VIEW: (
            "id",
            "name",
            "status",
            "ordered_at",
            "started_at",
            "finished_at",
            "products",
            "service",
            "account",
            "links",
            "tags",
            "parameters",
        ),
        "tiny": ("name", "status", "links"),
    },
    rules=(
        FieldRule("id", required=_DEFAULT, format=Format.UUID),
        FieldRule("name"),
        FieldRule("status", required=_DEFAULT, enum=_STATUSES),
        FieldRule("ordered_at", wire="ordered-at", format=Format.DATE_TIME),
        FieldRule("started_at", wire="started-at", format=Format.DATE_TIME),
        FieldRule("finished_at", wire="finished-at", format=Format.DATE_TIME),
        FieldRule("products", required=_DEFAULT, nested=PRODUCT_LIST_VIEWS),
        FieldRule("service", required=_DEFAULT, format=Format.URI),
        FieldRule("account", required=_DEFAULT, format=Format.URI),
        FieldRule("links", required=_DEFAULT, nested=LINK_VIEWS),
        FieldRule("tags"),
        FieldRule("parameters", required=_DEFAULT, nested=PARAMETER_VIEWS),
    ),
)

ORDER_LIST_ITEM_VIEWS: Final[ResultView] = ResultView(
    type_name="OrderListItem",
    result_cls=OrderListItem,
    views={
        DEFAULT_VIEW: (
            "id",
            "name",
            "status",
            "ordered_at",
            "started_at",
            "finished_at",
            "service",
            "account",
            "href",
        )
    },
    rules=(
        FieldRule("id", required=_DEFAULT, format=Format.UUID),
        FieldRule("name"),
        FieldRule("status", required=_DEFAULT, enum=_STATUSES),
        FieldRule("ordered_at", wire="ordered-at", format=Format.DATE_TIME),
        FieldRule("started_at", wire="started-at", format=Format.DATE_TIME),
        FieldRule("finished_at", wire="finished-at", format=Format.DATE_TIME),
        FieldRule("service", required=_DEFAULT, format=Format.URI),
        FieldRule("account", required=_DEFAULT, format=Format.URI),
        FieldRule("href", required=_DEFAULT),
    ),
)

ORDER_LIST_VIEWS: Final[ResultView] = ResultView(
    type_name="OrderListRT",
    result_cls=OrderListRT,
    views={DEFAULT_VIEW: ("items", "at_time", "links")},
    rules=(
        FieldRule("items", required=_DEFAULT, nested=ORDER_LIST_ITEM_VIEWS),
        FieldRule("at_time", wire="at-time", required=_DEFAULT, format=Format.DATE_TIME),
        FieldRule("links", required=_DEFAULT, nested=LINK_VIEWS),
    ),
)

ORDER_TOP_VIEWS: Final[ResultView] = ResultView(
    type_name="OrderTopResultItem",
    result_cls=OrderTopResultItem,
    views={DEFAULT_VIEW: ("container", "cpu", "memory", "storage", "ephemeral_storage")},
    rules=(
        FieldRule("container", required=_DEFAULT),
        FieldRule("cpu", required=_DEFAULT),
        FieldRule("memory", required=_DEFAULT),
        FieldRule("storage", required=_DEFAULT),
        FieldRule("ephemeral_storage", wire="ephemeral-storage", required=_DEFAULT),
    ),
)

META_ITEM_VIEWS: Final[ResultView] = ResultView(
    type_name="OrderMetadataListItemRT",
    result_cls=OrderMetadataListItem,
    views={DEFAULT_VIEW: ("id", "schema", "href", "content_type")},
    rules=(
        FieldRule("id", required=_DEFAULT),
        FieldRule("schema", required=_DEFAULT),
        FieldRule("href", required=_DEFAULT),
        FieldRule("content_type", wire="content-type", required=_DEFAULT),
    ),
)

META_LIST_VIEWS: Final[ResultView] = ResultView(
    type_name="PartialMetaListT",
    result_cls=PartialMetaList,
    views={DEFAULT_VIEW: ("items", "links")},
    rules=(
        FieldRule("items", required=_DEFAULT, nested=META_ITEM_VIEWS),
        FieldRule("links", required=_DEFAULT, nested=LINK_VIEWS),
    ),
)
