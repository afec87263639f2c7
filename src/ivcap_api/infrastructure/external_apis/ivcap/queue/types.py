# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Queue Wire Schemas

Purpose:
    JSON bodies of the queue endpoints. Message content is arbitrary JSON
    and passes through untouched.
"""
from __future__ import annotations

from typing import Any

from pydantic import Field

from ivcap_api.infrastructure.external_apis.ivcap.wire import LinkBody, WireModel

__all__ = [
    "CreateQueueRequestBody",
    "CreateQueueBody",
    "ReadQueueBody",
    "QueueListItemBody",
    "QueueListBody",
    "MessageBody",
    "MessageListBody",
    "MessageStatusBody",
]


class CreateQueueRequestBody(WireModel):
    name: str = ""
    description: str | None = None
    policy: str | None = None


class CreateQueueBody(WireModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    created_at: str | None = Field(None, alias="created-at")
    account: str | None = None


class ReadQueueBody(WireModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    total_messages: int | None = Field(None, alias="total-messages")
    bytes: int | None = None
    first_time: str | None = Field(None, alias="first-time")
    last_time: str | None = Field(None, alias="last-time")
    consumer_count: int | None = Field(None, alias="consumer-count")
    created_at: str | None = Field(None, alias="created-at")


class QueueListItemBody(WireModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    account: str | None = None
    href: str | None = None


class QueueListBody(WireModel):
    items: list[QueueListItemBody] | None = None
    at_time: str | None = Field(None, alias="at-time")
    links: list[LinkBody] | None = None


class MessageBody(WireModel):
    """Published message. ``schema`` is held as ``schema_`` to keep clear of
    the pydantic namespace."""

    id: str | None = None
    content: Any = None
    schema_: str | None = Field(None, alias="schema")
    content_type: str | None = Field(None, alias="content-type")

    def to_domain(self) -> dict[str, Any]:
        data = self.model_dump()
        data["schema"] = data.pop("schema_")
        return data


class MessageListBody(WireModel):
    messages: list[MessageBody] | None = None
    at_time: str | None = Field(None, alias="at-time")

    def to_domain(self) -> dict[str, Any]:
        return {
            "messages": (
                [m.to_domain() for m in self.messages] if self.messages is not None else None
            ),
            "at_time": self.at_time,
        }


class MessageStatusBody(WireModel):
    id: str | None = None
