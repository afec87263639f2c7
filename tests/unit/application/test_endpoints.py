# tests/unit/application/test_endpoints.py
from __future__ import annotations

from dataclasses import fields
from typing import Any

import pytest

from ivcap_api.application.endpoints import (
    Endpoint,
    OrderEndpoints,
    ProjectEndpoints,
    QueueEndpoints,
    authorize_then_call,
)
from ivcap_api.application.interfaces import CallContext
from ivcap_api.application.payloads import order as order_payloads
from ivcap_api.application.payloads import queue as queue_payloads
from ivcap_api.application.scopes import READ_SCOPE, WRITE_SCOPE, ScopeRequirement
from ivcap_api.domain.entities.order import (
    OrderMetadataListItem,
    OrderStatusRT,
    OrderTopResultItem,
    PartialMetaList,
    PartialProductList,
)
from ivcap_api.domain.exceptions import InvalidPayloadTypeError, InvalidScopes
from ivcap_api.domain.views import Viewed, materialize


class _FakeAuth:
    def __init__(self, *, deny: bool = False) -> None:
        self.deny = deny
        self.calls: list[tuple[str, ScopeRequirement]] = []

    async def __call__(
        self, ctx: CallContext, token: str, requirement: ScopeRequirement
    ) -> CallContext:
        self.calls.append((token, requirement))
        if self.deny:
            raise InvalidScopes(message="missing required scopes")
        return {**ctx, "principal": "alice"}


class _FakeOrders:
    def __init__(self) -> None:
        self.seen: list[tuple[str, CallContext, Any]] = []

    async def _record(self, name: str, ctx: CallContext, payload: Any) -> None:
        self.seen.append((name, ctx, payload))

    async def list(self, ctx: CallContext, payload: Any) -> Any:
        await self._record("list", ctx, payload)

    async def read(self, ctx: CallContext, payload: Any) -> OrderStatusRT:
        await self._record("read", ctx, payload)
        return OrderStatusRT(
            id=payload.id, status="pending", products=PartialProductList()
        )

    async def create(self, ctx: CallContext, payload: Any) -> Any:
        await self._record("create", ctx, payload)

    async def products(self, ctx: CallContext, payload: Any) -> Any:
        await self._record("products", ctx, payload)

    async def metadata(self, ctx: CallContext, payload: Any) -> PartialMetaList:
        await self._record("metadata", ctx, payload)
        item = OrderMetadataListItem(
            id="urn:ivcap:aspect:1", schema="urn:s", href="h", content_type="application/json"
        )
        return PartialMetaList(items=[item])

    async def logs(self, ctx: CallContext, payload: Any) -> Any:
        await self._record("logs", ctx, payload)
        return "stream"

    async def top(self, ctx: CallContext, payload: Any) -> list[OrderTopResultItem]:
        await self._record("top", ctx, payload)
        return [OrderTopResultItem(container="c1"), OrderTopResultItem(container="c2")]


@pytest.mark.asyncio
async def test_endpoint_authorizes_then_projects_result() -> None:
    svc, auth = _FakeOrders(), _FakeAuth()
    endpoints = OrderEndpoints.new(svc, auth)

    result = await endpoints.read({}, order_payloads.ReadPayload(id="o1", jwt="tok"))

    token, requirement = auth.calls[0]
    assert token == "tok"
    assert requirement.required_scopes == (READ_SCOPE,)
    name, ctx, _ = svc.seen[0]
    assert name == "read"
    assert ctx["principal"] == "alice"

    assert isinstance(result, Viewed)
    assert result.view == "default"
    assert materialize(result).id == "o1"


@pytest.mark.asyncio
async def test_list_results_are_projected_item_by_item() -> None:
    endpoints = OrderEndpoints.new(_FakeOrders(), _FakeAuth())
    result = await endpoints.top({}, order_payloads.TopPayload(order_id="urn:o:1"))
    assert [materialize(v).container for v in result] == ["c1", "c2"]


@pytest.mark.asyncio
async def test_write_methods_require_write_scope() -> None:
    auth = _FakeAuth()
    endpoints = OrderEndpoints.new(_FakeOrders(), auth)
    await endpoints.create({}, order_payloads.CreatePayload(jwt="tok"))
    assert auth.calls[0][1].required_scopes == (WRITE_SCOPE,)


@pytest.mark.asyncio
async def test_unviewed_results_pass_through() -> None:
    endpoints = OrderEndpoints.new(_FakeOrders(), _FakeAuth())
    assert await endpoints.logs({}, order_payloads.LogsPayload(order_id="urn:o:1")) == "stream"
    assert await endpoints.list({}, order_payloads.ListPayload()) is None


@pytest.mark.asyncio
async def test_wrong_payload_type_fails_before_authorization() -> None:
    svc, auth = _FakeOrders(), _FakeAuth()
    endpoints = OrderEndpoints.new(svc, auth)

    with pytest.raises(InvalidPayloadTypeError) as ei:
        await endpoints.read({}, order_payloads.ListPayload())

    assert "expected ReadPayload, got ListPayload" in str(ei.value)
    assert isinstance(ei.value, TypeError)
    assert auth.calls == []
    assert svc.seen == []


@pytest.mark.asyncio
async def test_authorization_failure_stops_the_call() -> None:
    svc = _FakeOrders()
    endpoints = OrderEndpoints.new(svc, _FakeAuth(deny=True))

    with pytest.raises(InvalidScopes):
        await endpoints.read({}, order_payloads.ReadPayload(id="o1"))
    assert svc.seen == []


@pytest.mark.asyncio
async def test_authorize_then_call_accepts_sync_methods() -> None:
    def enqueue(ctx: CallContext, payload: Any) -> None:
        return None

    endpoint = authorize_then_call(
        "queue", "enqueue", queue_payloads.EnqueuePayload, enqueue, _FakeAuth()
    )
    assert endpoint.__name__ == "queue_enqueue_endpoint"
    assert await endpoint({}, queue_payloads.EnqueuePayload(id="urn:q:1", content={})) is None


@pytest.mark.asyncio
async def test_use_wraps_every_endpoint() -> None:
    class _Queues:
        async def _ok(self, ctx: CallContext, payload: Any) -> None:
            return None

        create = read = delete = list = enqueue = dequeue = _ok

    endpoints = QueueEndpoints.new(_Queues(), _FakeAuth())
    called: list[str] = []

    def middleware(inner: Endpoint) -> Endpoint:
        async def wrapped(ctx: CallContext, payload: Any) -> Any:
            called.append(type(payload).__name__)
            return await inner(ctx, payload)

        return wrapped

    endpoints.use(middleware)
    await endpoints.delete({}, queue_payloads.DeletePayload(id="urn:q:1"))
    await endpoints.dequeue({}, queue_payloads.DequeuePayload(id="urn:q:1"))
    assert called == ["DeletePayload", "DequeuePayload"]


@pytest.mark.asyncio
async def test_metadata_page_is_projected() -> None:
    endpoints = OrderEndpoints.new(_FakeOrders(), _FakeAuth())
    out = await endpoints.metadata({}, order_payloads.MetadataPayload(order_id="o1"))
    assert isinstance(out, Viewed)
    page = materialize(out)
    assert page.items[0].content_type == "application/json"
    assert page.links == []


@pytest.mark.parametrize("bundle", [OrderEndpoints, ProjectEndpoints, QueueEndpoints])
def test_bundle_fields_match_its_method_table(bundle: Any) -> None:
    assert [f.name for f in fields(bundle)] == list(bundle.METHODS)
