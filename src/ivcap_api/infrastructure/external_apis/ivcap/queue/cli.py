# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Queue Payload Builders

Purpose:
    Turn command-line flag strings into queue payloads. Queue ids and
    policies are checked to be URIs; message content must be JSON.
"""
from __future__ import annotations

import json
from typing import Any, Final

from ivcap_api.application.payloads.queue import (
    CreatePayload,
    DeletePayload,
    DequeuePayload,
    EnqueuePayload,
    ListPayload,
    ReadPayload,
)
from ivcap_api.domain.exceptions.validation import PayloadBuildError
from ivcap_api.domain.validation import Format, Violations, check_format
from ivcap_api.infrastructure.external_apis.ivcap.flags import (
    optional,
    parse_body,
    parse_bool,
    parse_int,
    parse_limit,
)
from ivcap_api.infrastructure.external_apis.ivcap.queue.types import CreateQueueRequestBody

__all__ = [
    "build_create_payload",
    "build_read_payload",
    "build_delete_payload",
    "build_list_payload",
    "build_enqueue_payload",
    "build_dequeue_payload",
]

CREATE_EXAMPLE: Final[str] = (
    '{"name": "events", "description": "Events for the event service", '
    '"policy": "urn:ivcap:policy:123e4567-e89b-12d3-a456-426614174000"}'
)
CONTENT_EXAMPLE: Final[str] = '{"temperature": "21", "location": "Buoy101"}'


def build_create_payload(body: str, jwt: str = "") -> CreatePayload:
    req = parse_body(body, CreateQueueRequestBody, CREATE_EXAMPLE)
    errs = Violations()
    if req.policy is not None:
        errs.add(check_format("body.policy", req.policy, Format.URI))
    errs.raise_if_any()
    return CreatePayload(
        name=req.name, description=req.description, policy=req.policy, jwt=jwt
    )


def _queue_id(id: str) -> None:  # noqa: A002
    errs = Violations()
    errs.add(check_format("id", id, Format.URI))
    errs.raise_if_any()


def build_read_payload(id: str, jwt: str = "") -> ReadPayload:  # noqa: A002
    _queue_id(id)
    return ReadPayload(id=id, jwt=jwt)


def build_delete_payload(id: str, jwt: str = "") -> DeletePayload:  # noqa: A002
    _queue_id(id)
    return DeletePayload(id=id, jwt=jwt)


def build_list_payload(
    limit: str = "",
    page: str = "",
    filter: str = "",  # noqa: A002
    order_by: str = "",
    order_desc: str = "",
    at_time: str = "",
    jwt: str = "",
) -> ListPayload:
    """Build a list payload; ``limit`` must lie in 1..50, so ``"0"`` is refused."""
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


def build_enqueue_payload(
    id: str,  # noqa: A002
    content: str,
    schema: str = "",
    content_type: str = "",
    jwt: str = "",
) -> EnqueuePayload:
    try:
        message: Any = json.loads(content)
    except ValueError as exc:
        raise PayloadBuildError(
            f"invalid JSON for body, error: {exc}, example of valid JSON: {CONTENT_EXAMPLE}"
        ) from exc
    _queue_id(id)
    return EnqueuePayload(
        id=id,
        content=message,
        schema=optional(schema),
        content_type=optional(content_type),
        jwt=jwt,
    )


def build_dequeue_payload(id: str, limit: str = "", jwt: str = "") -> DequeuePayload:  # noqa: A002
    parsed = parse_int(limit, "limit") if limit else None
    _queue_id(id)
    return DequeuePayload(id=id, limit=parsed, jwt=jwt)
