# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Order Payloads

Purpose:
    Typed inputs of the order service methods. Every payload carries the
    caller's ``jwt``.

Layer: application/payloads
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ivcap_api.domain.entities.order import Parameter

__all__ = [
    "ListPayload",
    "ReadPayload",
    "OrderRequest",
    "CreatePayload",
    "ProductsPayload",
    "MetadataPayload",
    "LogsPayload",
    "TopPayload",
]


@dataclass(frozen=True, slots=True)
class ListPayload:
    """Page through orders.

    Args:
        limit: Maximum number of results per page (1..50).
        page: Opaque page token. When set, every other filter except
            ``limit`` is ignored by the server.
        filter: Filter expression.
        order_by: Field to order by.
        order_desc: Sort descending.
        at_time: RFC3339 timestamp to list the state as of.
        jwt: Caller token.
    """

    limit: int = 10
    page: str | None = None
    filter: str | None = None
    order_by: str | None = None
    order_desc: bool = False
    at_time: str | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class ReadPayload:
    """Read one order by id."""

    id: str = ""
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class OrderRequest:
    """Body of an order creation.

    Args:
        service: Reference (URI) to the service to run.
        policy: Reference (URI) to the policy to apply.
        name: Optional display name.
        tags: Optional tags.
        parameters: Service parameters; may be empty but is always sent.
    """

    service: str = ""
    policy: str | None = None
    name: str | None = None
    tags: list[str] | None = None
    parameters: list[Parameter] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CreatePayload:
    """Create an order."""

    orders: OrderRequest = field(default_factory=OrderRequest)
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class ProductsPayload:
    """Page through the products of an order."""

    order_id: str = ""
    limit: int = 10
    page: str | None = None
    order_by: str | None = None
    order_desc: bool = False
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class MetadataPayload:
    """Page through the metadata attached to an order."""

    order_id: str = ""
    limit: int = 10
    page: str | None = None
    order_by: str | None = None
    order_desc: bool = False
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class LogsPayload:
    """Stream the logs of an order, optionally bounded in time (unix seconds)."""

    order_id: str = ""
    from_: int | None = None
    to: int | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class TopPayload:
    """Resource usage of a running order."""

    order_id: str = ""
    jwt: str = ""
