# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Queue Payloads

Purpose:
    Typed inputs of the queue service methods.

Layer: application/payloads
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = [
    "CreatePayload",
    "ReadPayload",
    "DeletePayload",
    "ListPayload",
    "EnqueuePayload",
    "DequeuePayload",
]


@dataclass(frozen=True, slots=True)
class CreatePayload:
    """Create a queue.

    Args:
        name: Queue name.
        description: Optional description.
        policy: Optional reference (URI) to the access policy.
        jwt: Caller token.
    """

    name: str = ""
    description: str | None = None
    policy: str | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class ReadPayload:
    id: str = ""
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class DeletePayload:
    id: str = ""
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class ListPayload:
    """Page through queues."""

    limit: int = 10
    page: str | None = None
    filter: str | None = None
    order_by: str | None = None
    order_desc: bool = False
    at_time: str | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class EnqueuePayload:
    """Publish one message.

    Args:
        id: Queue reference (URI).
        content: JSON message content.
        schema: Optional schema reference of the content.
        content_type: Optional content type, sent as the ``Content-Type`` header.
        jwt: Caller token.
    """

    id: str = ""
    content: Any = None
    schema: str | None = None
    content_type: str | None = None
    jwt: str = ""


@dataclass(frozen=True, slots=True)
class DequeuePayload:
    """Fetch up to ``limit`` messages."""

    id: str = ""
    limit: int | None = None
    jwt: str = ""
