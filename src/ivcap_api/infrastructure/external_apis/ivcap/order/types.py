# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Order Wire Schemas

Purpose:
    JSON bodies of the order endpoints. Hyphenated wire names are mapped to
    attribute names through aliases.
"""
from __future__ import annotations

from typing import Any

from pydantic import Field, TypeAdapter

from ivcap_api.application.payloads.order import OrderRequest
from ivcap_api.infrastructure.external_apis.ivcap.wire import LinkBody, WireModel

__all__ = [
    "ParameterBody",
    "CreateRequestBody",
    "ProductListItemBody",
    "PartialProductListBody",
    "MetadataListItemBody",
    "PartialMetaListBody",
    "OrderStatusBody",
    "OrderListItemBody",
    "OrderListBody",
    "OrderTopItemBody",
    "TOP_BODY",
]


class ParameterBody(WireModel):
    name: str | None = None
    value: str | None = None


class CreateRequestBody(WireModel):
    """Order creation request. ``parameters`` is always sent, possibly empty."""

    service: str = ""
    policy: str | None = None
    name: str | None = None
    tags: list[str] | None = None
    parameters: list[ParameterBody] | None = None

    @classmethod
    def from_request(cls, req: OrderRequest) -> CreateRequestBody:
        return cls(
            service=req.service,
            policy=req.policy,
            name=req.name,
            tags=list(req.tags) if req.tags is not None else None,
            parameters=[ParameterBody(name=p.name, value=p.value) for p in req.parameters],
        )


class ProductListItemBody(WireModel):
    id: str | None = None
    name: str | None = None
    status: str | None = None
    mime_type: str | None = Field(None, alias="mime-type")
    size: int | None = None
    href: str | None = None
    data_href: str | None = Field(None, alias="dataRef")


class PartialProductListBody(WireModel):
    items: list[ProductListItemBody] | None = None
    links: list[LinkBody] | None = None


class MetadataListItemBody(WireModel):
    """Metadata record. ``schema`` is held as ``schema_`` to keep clear of
    the pydantic namespace."""

    id: str | None = None
    schema_: str | None = Field(None, alias="schema")
    href: str | None = None
    content_type: str | None = Field(None, alias="content-type")

    def to_domain(self) -> dict[str, Any]:
        data = self.model_dump()
        data["schema"] = data.pop("schema_")
        return data


class PartialMetaListBody(WireModel):
    items: list[MetadataListItemBody] | None = None
    links: list[LinkBody] | None = None

    def to_domain(self) -> dict[str, Any]:
        return {
            "items": [i.to_domain() for i in self.items] if self.items is not None else None,
            "links": [link.model_dump() for link in self.links] if self.links is not None else None,
        }


class OrderStatusBody(WireModel):
    """Body of ``read`` and ``create``."""

    id: str | None = None
    name: str | None = None
    status: str | None = None
    ordered_at: str | None = Field(None, alias="ordered-at")
    started_at: str | None = Field(None, alias="started-at")
    finished_at: str | None = Field(None, alias="finished-at")
    products: PartialProductListBody | None = None
    service: str | None = None
    account: str | None = None
    links: list[LinkBody] | None = None
    tags: list[str] | None = None
    parameters: list[ParameterBody] | None = None


class OrderListItemBody(WireModel):
    id: str | None = None
    name: str | None = None
    status: str | None = None
    ordered_at: str | None = Field(None, alias="ordered-at")
    started_at: str | None = Field(None, alias="started-at")
    finished_at: str | None = Field(None, alias="finished-at")
    service: str | None = None
    account: str | None = None
    href: str | None = None


class OrderListBody(WireModel):
    items: list[OrderListItemBody] | None = None
    at_time: str | None = Field(None, alias="at-time")
    links: list[LinkBody] | None = None


class OrderTopItemBody(WireModel):
    container: str | None = None
    cpu: str | None = None
    memory: str | None = None
    storage: str | None = None
    ephemeral_storage: str | None = Field(None, alias="ephemeral-storage")


TOP_BODY: TypeAdapter[list[OrderTopItemBody]] = TypeAdapter(list[OrderTopItemBody])
