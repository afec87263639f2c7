# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Application Interface: Queue Service.

Layer:
    application/interfaces
"""

from __future__ import annotations

from typing import Protocol

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
    CreateQueueResponse,
    MessageList,
    MessageStatus,
    QueueListResult,
    ReadQueueResponse,
)


class QueueService(Protocol):
    """Manage message queues."""

    async def create(self, ctx: CallContext, payload: CreatePayload) -> CreateQueueResponse: ...

    async def read(self, ctx: CallContext, payload: ReadPayload) -> ReadQueueResponse: ...

    async def delete(self, ctx: CallContext, payload: DeletePayload) -> None: ...

    async def list(self, ctx: CallContext, payload: ListPayload) -> QueueListResult: ...

    async def enqueue(self, ctx: CallContext, payload: EnqueuePayload) -> MessageStatus: ...

    async def dequeue(self, ctx: CallContext, payload: DequeuePayload) -> MessageList: ...
