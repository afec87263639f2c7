# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Application Interface: Order Service.

Synopsis:
    Methods a backend exposes for orders. Implementations raise the errors
    in :mod:`ivcap_api.domain.exceptions.service`.

Layer:
    application/interfaces
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from ivcap_api.application.interfaces import CallContext
from ivcap_api.application.payloads.order import (
    CreatePayload,
    ListPayload,
    LogsPayload,
    MetadataPayload,
    ProductsPayload,
    ReadPayload,
    TopPayload,
)
from ivcap_api.domain.entities.order import (
    OrderListRT,
    OrderStatusRT,
    OrderTopResultItem,
    PartialMetaList,
    PartialProductList,
)


class LogStream(Protocol):
    """Open log stream owned by the caller, who must close it."""

    def aiter_bytes(self) -> AsyncIterator[bytes]: ...

    async def aclose(self) -> None: ...


class OrderService(Protocol):
    """Manage orders of services."""

    async def list(self, ctx: CallContext, payload: ListPayload) -> OrderListRT:
        """Return a page of orders."""

    async def read(self, ctx: CallContext, payload: ReadPayload) -> OrderStatusRT:
        """Return the status of one order."""

    async def create(self, ctx: CallContext, payload: CreatePayload) -> OrderStatusRT:
        """Create an order and return its initial status."""

    async def products(self, ctx: CallContext, payload: ProductsPayload) -> PartialProductList:
        """Return a page of the products an order created."""

    async def metadata(self, ctx: CallContext, payload: MetadataPayload) -> PartialMetaList:
        """Return a page of the metadata attached to an order."""

    async def logs(self, ctx: CallContext, payload: LogsPayload) -> LogStream:
        """Open the log stream of an order. The caller drains and closes it."""

    async def top(self, ctx: CallContext, payload: TopPayload) -> list[OrderTopResultItem]:
        """Return resource usage per container."""
