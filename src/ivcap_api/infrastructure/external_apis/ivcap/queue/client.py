# src/ivcap_api/infrastructure/external_apis/ivcap/queue/client.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Queue HTTP client.

Implements :class:`ivcap_api.application.interfaces.queue_service.QueueService`
over HTTP. ``enqueue`` sends the message content itself as the JSON body;
its schema travels in the query and its content type in ``Content-Type``.
"""

from __future__ import annotations

import json
from typing import Final

from ivcap_api.application.interfaces import CallContext
from ivcap_api.application.payloads.queue import (
    CreatePayload,
    DeletePayload,
    DequeuePayload,
    EnqueuePayload,
    ListPayload,
    ReadPayload,
)
from ivcap_api.domain.entities.queue import (
    CREATE_QUEUE_VIEWS,
    MESSAGE_LIST_VIEWS,
    MESSAGE_STATUS_VIEWS,
    QUEUE_LIST_VIEWS,
    READ_QUEUE_VIEWS,
    CreateQueueResponse,
    MessageList,
    MessageStatus,
    QueueListResult,
    ReadQueueResponse,
)
from ivcap_api.domain.exceptions.service import ResourceAlreadyCreated
from ivcap_api.infrastructure.external_apis.ivcap import paths
from ivcap_api.infrastructure.external_apis.ivcap.queue.types import (
    CreateQueueBody,
    CreateQueueRequestBody,
    MessageListBody,
    MessageStatusBody,
    QueueListBody,
    ReadQueueBody,
)
from ivcap_api.infrastructure.external_apis.ivcap.transport import (
    DELETE_ERRORS,
    LIST_ERRORS,
    LOOKUP_ERRORS,
    READ_ERRORS,
    IvcapHTTPClient,
    Operation,
    list_query,
)

__all__ = ["QueueClient"]

SERVICE: Final[str] = "queue"
_JSON: Final[str] = "application/json"

_CREATE = Operation(
    SERVICE,
    "create",
    "POST",
    201,
    (*LOOKUP_ERRORS, ResourceAlreadyCreated),
    CreateQueueBody,
    CREATE_QUEUE_VIEWS,
)
_READ = Operation(SERVICE, "read", "GET", 200, READ_ERRORS, ReadQueueBody, READ_QUEUE_VIEWS)
_DELETE = Operation(SERVICE, "delete", "DELETE", 204, DELETE_ERRORS)
_LIST = Operation(SERVICE, "list", "GET", 200, LIST_ERRORS, QueueListBody, QUEUE_LIST_VIEWS)
_ENQUEUE = Operation(
    SERVICE, "enqueue", "POST", 200, LIST_ERRORS, MessageStatusBody, MESSAGE_STATUS_VIEWS
)
_DEQUEUE = Operation(
    SERVICE, "dequeue", "GET", 200, LIST_ERRORS, MessageListBody, MESSAGE_LIST_VIEWS
)


class QueueClient(IvcapHTTPClient):
    """HTTP client for the queue service."""

    async def create(self, ctx: CallContext, payload: CreatePayload) -> CreateQueueResponse:
        body = CreateQueueRequestBody(
            name=payload.name, description=payload.description, policy=payload.policy
        )
        return await self._call(
            _CREATE, paths.queues_path(), token=payload.jwt, json=body.to_wire()
        )

    async def read(self, ctx: CallContext, payload: ReadPayload) -> ReadQueueResponse:
        return await self._call(_READ, paths.queue_path(payload.id), token=payload.jwt)

    async def delete(self, ctx: CallContext, payload: DeletePayload) -> None:
        await self._call(_DELETE, paths.queue_path(payload.id), token=payload.jwt)

    async def list(self, ctx: CallContext, payload: ListPayload) -> QueueListResult:
        return await self._call(
            _LIST, paths.queues_path(), token=payload.jwt, params=list_query(payload)
        )

    async def enqueue(self, ctx: CallContext, payload: EnqueuePayload) -> MessageStatus:
        params = {"schema": payload.schema} if payload.schema is not None else None
        return await self._call(
            _ENQUEUE,
            paths.queue_messages_path(payload.id),
            token=payload.jwt,
            params=params,
            content=json.dumps(payload.content).encode("utf-8"),
            headers={"Content-Type": payload.content_type or _JSON},
        )

    async def dequeue(self, ctx: CallContext, payload: DequeuePayload) -> MessageList:
        params = {"limit": str(payload.limit)} if payload.limit is not None else None
        return await self._call(
            _DEQUEUE, paths.queue_messages_path(payload.id), token=payload.jwt, params=params
        )
