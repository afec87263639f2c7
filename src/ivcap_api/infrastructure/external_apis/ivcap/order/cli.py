# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Order Payload Builders

Purpose:
    Turn command-line flag strings into order payloads, applying the
    server's parameter rules before any request is sent.
"""
from __future__ import annotations

from typing import Final

from ivcap_api.application.payloads.order import (
    CreatePayload,
    ListPayload,
    LogsPayload,
    MetadataPayload,
    OrderRequest,
    ProductsPayload,
    ReadPayload,
    TopPayload,
)
from ivcap_api.domain.entities.order import Parameter
from ivcap_api.domain.validation import (
    Format,
    Violations,
    check_format,
    missing_field,
)
from ivcap_api.infrastructure.external_apis.ivcap.flags import (
    optional,
    parse_body,
    parse_bool,
    parse_int,
    parse_limit,
)
from ivcap_api.infrastructure.external_apis.ivcap.order.types import CreateRequestBody

__all__ = [
    "build_list_payload",
    "build_read_payload",
    "build_create_payload",
    "build_products_payload",
    "build_metadata_payload",
    "build_logs_payload",
    "build_top_payload",
]

CREATE_EXAMPLE: Final[str] = (
    '{"name": "Fire risk for Lot2", '
    '"parameters": [{"name": "region", "value": "Upper Valley"}, '
    '{"name": "threshold", "value": "10"}], '
    '"policy": "urn:ivcap:policy:123e4567-e89b-12d3-a456-426614174000", '
    '"service": "urn:ivcap:service:123e4567-e89b-12d3-a456-426614174000", '
    '"tags": ["tag1", "tag2"]}'
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


def build_read_payload(id: str, jwt: str = "") -> ReadPayload:  # noqa: A002
    return ReadPayload(id=id, jwt=jwt)


def build_create_payload(body: str, jwt: str = "") -> CreatePayload:
    """Build a create payload from a JSON body.

    Raises:
        PayloadBuildError: If ``body`` is not valid JSON.
        ValidationError: If ``parameters`` is missing or a reference is not a URI.
    """
    req = parse_body(body, CreateRequestBody, CREATE_EXAMPLE)
    errs = Violations()
    if req.parameters is None:
        errs.add(missing_field("parameters", "body"))
    errs.add(check_format("body.service", req.service, Format.URI))
    if req.policy is not None:
        errs.add(check_format("body.policy", req.policy, Format.URI))
    errs.raise_if_any()
    return CreatePayload(
        orders=OrderRequest(
            service=req.service,
            policy=req.policy,
            name=req.name,
            tags=req.tags,
            parameters=[Parameter(name=p.name, value=p.value) for p in req.parameters or []],
        ),
        jwt=jwt,
    )


def build_products_payload(
    order_id: str,
    limit: str = "",
    page: str = "",
    order_by: str = "",
    order_desc: str = "",
    jwt: str = "",
) -> ProductsPayload:
    errs = Violations()
    errs.add(check_format("orderID", order_id, Format.URI))
    parsed_limit = parse_limit(limit, errs)
    desc = parse_bool(order_desc, "orderDesc") if order_desc else False
    errs.raise_if_any()
    return ProductsPayload(
        order_id=order_id,
        limit=parsed_limit,
        page=optional(page),
        order_by=optional(order_by),
        order_desc=desc,
        jwt=jwt,
    )


def build_metadata_payload(
    order_id: str,
    limit: str = "",
    page: str = "",
    order_by: str = "",
    order_desc: str = "",
    jwt: str = "",
) -> MetadataPayload:
    errs = Violations()
    errs.add(check_format("orderID", order_id, Format.URI))
    parsed_limit = parse_limit(limit, errs)
    desc = parse_bool(order_desc, "orderDesc") if order_desc else False
    errs.raise_if_any()
    return MetadataPayload(
        order_id=order_id,
        limit=parsed_limit,
        page=optional(page),
        order_by=optional(order_by),
        order_desc=desc,
        jwt=jwt,
    )

def build_logs_payload(
    order_id: str, from_: str = "", to: str = "", jwt: str = ""
) -> LogsPayload:
    start = parse_int(from_, "from", "INT64") if from_ else None
    end = parse_int(to, "to", "INT64") if to else None
    errs = Violations()
    errs.add(check_format("orderID", order_id, Format.URI))
    errs.raise_if_any()
    return LogsPayload(order_id=order_id, from_=start, to=end, jwt=jwt)


def build_top_payload(order_id: str, jwt: str = "") -> TopPayload:
    errs = Violations()
    errs.add(check_format("orderID", order_id, Format.URI))
    errs.raise_if_any()
    return TopPayload(order_id=order_id, jwt=jwt)
