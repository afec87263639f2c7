# src/ivcap_api/infrastructure/external_apis/ivcap/order/client.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Order HTTP client.

Implements :class:`ivcap_api.application.interfaces.order_service.OrderService`
over HTTP. ``logs`` streams: on success the open ``httpx.Response`` is
returned and the caller must ``aclose()`` it.
"""

from __future__ import annotations

from typing import Any, Final

import httpx

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
    ORDER_LIST_VIEWS,
    ORDER_STATUS_VIEWS,
    META_LIST_VIEWS,
    ORDER_TOP_VIEWS,
    PRODUCT_LIST_VIEWS,
    OrderListRT,
    OrderStatusRT,
    OrderTopResultItem,
    PartialMetaList,
    PartialProductList,
)
from ivcap_api.infrastructure.external_apis.ivcap import paths
from ivcap_api.infrastructure.external_apis.ivcap.order.types import (
    TOP_BODY,
    CreateRequestBody,
    OrderListBody,
    OrderStatusBody,
    PartialMetaListBody,
    PartialProductListBody,
)
from ivcap_api.infrastructure.external_apis.ivcap.transport import (
    LIST_ERRORS,
    LOOKUP_ERRORS,
    READ_ERRORS,
    IvcapHTTPClient,
    Operation,
    list_query,
    query_bool,
)

__all__ = ["OrderClient"]

SERVICE: Final[str] = "order"

_LIST = Operation(SERVICE, "list", "GET", 200, LIST_ERRORS, OrderListBody, ORDER_LIST_VIEWS)
_READ = Operation(SERVICE, "read", "GET", 200, READ_ERRORS, OrderStatusBody, ORDER_STATUS_VIEWS)
_CREATE = Operation(
    SERVICE, "create", "POST", 200, LOOKUP_ERRORS, OrderStatusBody, ORDER_STATUS_VIEWS
)
_PRODUCTS = Operation(
    SERVICE, "products", "GET", 200, LOOKUP_ERRORS, PartialProductListBody, PRODUCT_LIST_VIEWS
)
_METADATA = Operation(
    SERVICE, "metadata", "GET", 200, LOOKUP_ERRORS, PartialMetaListBody, META_LIST_VIEWS
)
_LOGS = Operation(SERVICE, "logs", "GET", 200, LOOKUP_ERRORS, stream=True)
_TOP = Operation(SERVICE, "top", "GET", 200, LOOKUP_ERRORS, TOP_BODY, ORDER_TOP_VIEWS)


class OrderClient(IvcapHTTPClient):
    """HTTP client for the order service."""

    async def list(self, ctx: CallContext, payload: ListPayload) -> OrderListRT:
        return await self._call(
            _LIST, paths.orders_path(), token=payload.jwt, params=list_query(payload)
        )

    async def read(self, ctx: CallContext, payload: ReadPayload) -> OrderStatusRT:
        return await self._call(_READ, paths.order_path(payload.id), token=payload.jwt)

    async def create(self, ctx: CallContext, payload: CreatePayload) -> OrderStatusRT:
        body = CreateRequestBody.from_request(payload.orders)
        return await self._call(
            _CREATE, paths.orders_path(), token=payload.jwt, json=body.to_wire()
        )

    async def products(self, ctx: CallContext, payload: ProductsPayload) -> PartialProductList:
        return await self._call(
            _PRODUCTS,
            paths.order_products_path(payload.order_id),
            token=payload.jwt,
            params=_page_query(payload),
        )

    async def metadata(self, ctx: CallContext, payload: MetadataPayload) -> PartialMetaList:
        return await self._call(
            _METADATA,
            paths.order_metadata_path(payload.order_id),
            token=payload.jwt,
            params=_page_query(payload),
        )

    async def logs(self, ctx: CallContext, payload: LogsPayload) -> httpx.Response:
        """Open the log stream of an order.

        Returns:
            The open response; iterate ``aiter_bytes()`` and ``aclose()`` it.
        """
        params: dict[str, Any] = {}
        if payload.from_ is not None:
            params["from"] = str(payload.from_)
        if payload.to is not None:
            params["to"] = str(payload.to)
        return await self._call(
            _LOGS, paths.order_logs_path(payload.order_id), token=payload.jwt, params=params
        )

    async def top(self, ctx: CallContext, payload: TopPayload) -> list[OrderTopResultItem]:
        return await self._call(_TOP, paths.order_top_path(payload.order_id), token=payload.jwt)


def _page_query(payload: ProductsPayload | MetadataPayload) -> dict[str, str]:
    params: dict[str, str] = {}
    if payload.order_by is not None:
        params["order-by"] = payload.order_by
    params["order-desc"] = query_bool(payload.order_desc)
    params["limit"] = str(payload.limit)
    if payload.page is not None:
        params["page"] = payload.page
    return params
