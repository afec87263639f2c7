from __future__ import annotations

import json

import httpx
import pytest
import respx

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
    Message,
    MessageStatus,
    QueueListItem,
)
from ivcap_api.domain.exceptions import (
    InvalidResponseError,
    ResourceAlreadyCreated,
    ResourceNotFound,
)
from ivcap_api.infrastructure.external_apis.ivcap.queue.client import QueueClient
from ivcap_api.infrastructure.external_apis.ivcap.settings import IvcapSettings

QUEUE = "urn:ivcap:queue:123e4567-e89b-12d3-a456-426614174000"
ACCOUNT = "urn:ivcap:account:1"

_CREATED = {
    "id": QUEUE,
    "name": "events",
    "description": "Events for the event service",
    "created-at": "2024-01-01T00:00:00Z",
    "account": ACCOUNT,
}


@pytest.mark.asyncio
@respx.mock
async def test_create_succeeds_with_201(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        route = respx.post(f"{ivcap_settings.base_url}/1/queues").mock(
            return_value=httpx.Response(201, json=_CREATED)
        )

        result = await client.create({}, CreatePayload(name="events", jwt="tok"))

        assert result == CreateQueueResponse(
            id=QUEUE,
            name="events",
            description="Events for the event service",
            created_at="2024-01-01T00:00:00Z",
            account=ACCOUNT,
        )
        assert json.loads(route.calls.last.request.content) == {"name": "events"}


@pytest.mark.asyncio
@respx.mock
async def test_create_200_is_not_the_documented_success(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        respx.post(f"{ivcap_settings.base_url}/1/queues").mock(
            return_value=httpx.Response(200, json=_CREATED)
        )
        with pytest.raises(InvalidResponseError) as ei:
            await client.create({}, CreatePayload(name="events"))
        assert ei.value.status_code == 200


@pytest.mark.asyncio
@respx.mock
async def test_create_conflict(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        respx.post(f"{ivcap_settings.base_url}/1/queues").mock(
            return_value=httpx.Response(409, json={"id": QUEUE, "message": "exists"})
        )
        with pytest.raises(ResourceAlreadyCreated) as ei:
            await client.create({}, CreatePayload(name="events"))
        assert ei.value == ResourceAlreadyCreated(id=QUEUE, message="exists")


@pytest.mark.asyncio
@respx.mock
async def test_read(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/queues/{QUEUE}").mock(
            return_value=httpx.Response(
                200,
                json={
                    "id": QUEUE,
                    "name": "events",
                    "total-messages": 12,
                    "bytes": 4096,
                    "first-time": "2024-01-01T00:00:00Z",
                    "last-time": "2024-01-02T00:00:00Z",
                    "consumer-count": 2,
                    "created-at": "2023-12-31T00:00:00Z",
                },
            )
        )

        result = await client.read({}, ReadPayload(id=QUEUE))

        assert result.total_messages == 12
        assert result.bytes == 4096
        assert result.consumer_count == 2
        assert result.last_time == "2024-01-02T00:00:00Z"
        assert result.description is None


@pytest.mark.asyncio
@respx.mock
async def test_read_404(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/queues/{QUEUE}").mock(
            return_value=httpx.Response(404, json={"id": QUEUE, "message": "not found"})
        )
        with pytest.raises(ResourceNotFound):
            await client.read({}, ReadPayload(id=QUEUE))


@pytest.mark.asyncio
@respx.mock
async def test_delete(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        route = respx.delete(f"{ivcap_settings.base_url}/1/queues/{QUEUE}").mock(
            return_value=httpx.Response(204)
        )
        assert await client.delete({}, DeletePayload(id=QUEUE)) is None
        assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_list(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        route = respx.get(f"{ivcap_settings.base_url}/1/queues").mock(
            return_value=httpx.Response(
                200,
                json={
                    "items": [
                        {
                            "id": QUEUE,
                            "name": "events",
                            "account": ACCOUNT,
                            "href": f"https://api/1/queues/{QUEUE}",
                        }
                    ],
                    "at-time": "2024-01-01T00:00:00Z",
                    "links": [],
                },
            )
        )

        result = await client.list({}, ListPayload(filter="name~='ev'"))

        assert result.items == [
            QueueListItem(
                id=QUEUE, name="events", account=ACCOUNT, href=f"https://api/1/queues/{QUEUE}"
            )
        ]
        params = route.calls.last.request.url.params
        assert params["filter"] == "name~='ev'"
        assert params["limit"] == "10"


@pytest.mark.asyncio
@respx.mock
async def test_enqueue_sends_content_schema_and_type(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        route = respx.post(f"{ivcap_settings.base_url}/1/queues/{QUEUE}/messages").mock(
            return_value=httpx.Response(200, json={"id": "urn:ivcap:message:1"})
        )
        payload = EnqueuePayload(
            id=QUEUE,
            content={"temperature": "21", "location": "Buoy101"},
            schema="urn:ivcap:schema:buoy.1",
            content_type="application/vnd.buoy+json",
        )

        result = await client.enqueue({}, payload)

        assert result == MessageStatus(id="urn:ivcap:message:1")
        sent = route.calls.last.request
        assert sent.url.params["schema"] == "urn:ivcap:schema:buoy.1"
        assert sent.headers["Content-Type"] == "application/vnd.buoy+json"
        assert json.loads(sent.content) == {"temperature": "21", "location": "Buoy101"}


@pytest.mark.asyncio
@respx.mock
async def test_enqueue_defaults_to_json(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        route = respx.post(f"{ivcap_settings.base_url}/1/queues/{QUEUE}/messages").mock(
            return_value=httpx.Response(200, json={"id": "m1"})
        )
        await client.enqueue({}, EnqueuePayload(id=QUEUE, content=[1, 2, 3]))

        sent = route.calls.last.request
        assert sent.headers["Content-Type"] == "application/json"
        assert "schema" not in sent.url.params
        assert json.loads(sent.content) == [1, 2, 3]


@pytest.mark.asyncio
@respx.mock
async def test_dequeue(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        route = respx.get(f"{ivcap_settings.base_url}/1/queues/{QUEUE}/messages").mock(
            return_value=httpx.Response(
                200,
                json={
                    "messages": [
                        {
                            "id": "urn:ivcap:message:1",
                            "content": {"temperature": "21"},
                            "schema": "urn:ivcap:schema:buoy.1",
                            "content-type": "application/json",
                        }
                    ],
                    "at-time": "2024-01-01T00:00:00Z",
                },
            )
        )

        result = await client.dequeue({}, DequeuePayload(id=QUEUE, limit=5))

        assert result.messages == [
            Message(
                id="urn:ivcap:message:1",
                content={"temperature": "21"},
                schema="urn:ivcap:schema:buoy.1",
                content_type="application/json",
            )
        ]
        assert result.at_time == "2024-01-01T00:00:00Z"
        assert route.calls.last.request.url.params["limit"] == "5"


@pytest.mark.asyncio
@respx.mock
async def test_dequeue_without_limit_sends_no_query(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = QueueClient(ivcap_settings, http=http)
        route = respx.get(f"{ivcap_settings.base_url}/1/queues/{QUEUE}/messages").mock(
            return_value=httpx.Response(200, json={"messages": []})
        )
        result = await client.dequeue({}, DequeuePayload(id=QUEUE))
        assert result.messages == []
        assert route.calls.last.request.url.query == b""
