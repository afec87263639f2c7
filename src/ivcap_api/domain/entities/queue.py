# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Queue Entities

Purpose:
    Result types returned by the queue service. Each declares only the
    ``default`` view.

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

from ivcap_api.domain.entities.common import LINK_VIEWS, Link
from ivcap_api.domain.validation import Format
from ivcap_api.domain.views import DEFAULT_VIEW, FieldRule, ResultView

__all__ = [
    "CreateQueueResponse",
    "ReadQueueResponse",
    "QueueListItem",
    "QueueListResult",
    "Message",
    "MessageList",
    "MessageStatus",
    "CREATE_QUEUE_VIEWS",
    "READ_QUEUE_VIEWS",
    "QUEUE_LIST_VIEWS",
    "MESSAGE_LIST_VIEWS",
    "MESSAGE_STATUS_VIEWS",
]

_DEFAULT: Final[tuple[str, ...]] = (DEFAULT_VIEW,)


@dataclass(frozen=True, slots=True)
class CreateQueueResponse:
    """Queue as returned right after creation."""

    id: str = ""
    name: str = ""
    description: str | None = None
    created_at: str = ""
    account: str | None = None


@dataclass(frozen=True, slots=True)
class ReadQueueResponse:
    """Queue with message statistics."""

    id: str | None = None
    name: str = ""
    description: str | None = None
    total_messages: int | None = None
    bytes: int | None = None
    first_time: str | None = None
    last_time: str | None = None
    consumer_count: int | None = None
    created_at: str = ""


@dataclass(frozen=True, slots=True)
class QueueListItem:
    """Summary row of a queue listing."""

    id: str = ""
    name: str | None = None
    description: str | None = None
    account: str = ""
    href: str = ""


@dataclass(frozen=True, slots=True)
class QueueListResult:
    """Page of queues."""

    items: list[QueueListItem] = field(default_factory=list)
    at_time: str = ""
    links: list[Link] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Message:
    """Queued message with arbitrary JSON content."""

    id: str | None = None
    content: Any = None
    schema: str | None = None
    content_type: str | None = None


@dataclass(frozen=True, slots=True)
class MessageList:
    """Batch of dequeued messages."""

    messages: list[Message] = field(default_factory=list)
    at_time: str | None = None


@dataclass(frozen=True, slots=True)
class MessageStatus:
    """Acknowledgement of an enqueued message."""

    id: str | None = None


# ------------------------------- View tables ------------------------------- #

CREATE_QUEUE_VIEWS: Final[ResultView] = ResultView(
    type_name="CreateQueueResponse",
    result_cls=CreateQueueResponse,
    views={DEFAULT_VIEW: ("id", "name", "description", "created_at", "account")},
    rules=(
        FieldRule("id", required=_DEFAULT, format=Format.URI),
        FieldRule("name", required=_DEFAULT),
        FieldRule("description"),
        FieldRule("created_at", wire="created-at", required=_DEFAULT, format=Format.DATE_TIME),
        FieldRule("account", format=Format.URI),
    ),
)

READ_QUEUE_VIEWS: Final[ResultView] = ResultView(
    type_name="ReadQueueResponse",
    result_cls=ReadQueueResponse,
    views={
        DEFAULT_VIEW: (
            "id",
            "name",
            "description",
            "total_messages",
            "bytes",
            "first_time",
            "last_time",
            "consumer_count",
            "created_at",
        )
    },
    rules=(
        FieldRule("id", format=Format.URI),
        FieldRule("name", required=_DEFAULT),
        FieldRule("description"),
        FieldRule("total_messages", wire="total-messages"),
        FieldRule("bytes"),
        FieldRule("first_time", wire="first-time", format=Format.DATE_TIME),
        FieldRule("last_time", wire="last-time", format=Format.DATE_TIME),
        FieldRule("consumer_count", wire="consumer-count"),
        FieldRule("created_at", wire="created-at", required=_DEFAULT, format=Format.DATE_TIME),
    ),
)

QUEUE_ITEM_VIEWS: Final[ResultView] = ResultView(
    type_name="QueueListItem",
    result_cls=QueueListItem,
    views={DEFAULT_VIEW: ("id", "name", "description", "account", "href")},
    rules=(
        FieldRule("id", required=_DEFAULT, format=Format.URI),
        FieldRule("name"),
        FieldRule("description"),
        FieldRule("account", required=_DEFAULT, format=Format.URI),
        FieldRule("href", required=_DEFAULT),
    ),
)

QUEUE_LIST_VIEWS: Final[ResultView] = ResultView(
    type_name="QueueListResult",
    result_cls=QueueListResult,
    views={DEFAULT_VIEW: ("items", "at_time", "links")},
    rules=(
        FieldRule("items", required=_DEFAULT, nested=QUEUE_ITEM_VIEWS),
        FieldRule("at_time", wire="at-time", required=_DEFAULT, format=Format.DATE_TIME),
        FieldRule("links", required=_DEFAULT, nested=LINK_VIEWS),
    ),
)

MESSAGE_VIEWS: Final[ResultView] = ResultView(
    type_name="Message",
    result_cls=Message,
    views={DEFAULT_VIEW: ("id", "content", "schema", "content_type")},
    rules=(
        FieldRule("id", format=Format.URI),
        FieldRule("content"),
        FieldRule("schema"),
        FieldRule("content_type", wire="content-type"),
    ),
)

MESSAGE_LIST_VIEWS: Final[ResultView] = ResultView(
    type_name="MessageList",
    result_cls=MessageList,
    views={DEFAULT_VIEW: ("messages", "at_time")},
    rules=(
        FieldRule("messages", required=_DEFAULT, nested=MESSAGE_VIEWS),
        FieldRule("at_time", wire="at-time", format=Format.DATE_TIME),
    ),
)

MESSAGE_STATUS_VIEWS: Final[ResultView] = ResultView(
    type_name="MessageStatus",
    result_cls=MessageStatus,
    views={DEFAULT_VIEW: ("id",)},
    rules=(FieldRule("id"),),
)
