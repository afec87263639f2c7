# tests/unit/infrastructure/external_apis/ivcap/test_transport.py
from __future__ import annotations

import json
from collections.abc import AsyncIterator

import httpx
import pytest
import respx

from ivcap_api.application.payloads import order as order_payloads
from ivcap_api.application.payloads import project as project_payloads
from ivcap_api.domain.exceptions import (
    BadRequest,
    DecodingError,
    InvalidParameter,
    InvalidResponseError,
    InvalidScopes,
    RequestError,
    ResourceNotFound,
    ResponseValidationError,
    ServiceError,
    ServiceNotAvailable,
    ServiceNotImplemented,
    Unauthorized,
)
from ivcap_api.infrastructure.external_apis.ivcap.order.client import OrderClient
from ivcap_api.infrastructure.external_apis.ivcap.project.client import ProjectClient
from ivcap_api.infrastructure.external_apis.ivcap.settings import IvcapSettings
from ivcap_api.infrastructure.external_apis.ivcap.transport import (
    LOOKUP_ERRORS,
    authorization_header,
    query_bool,
)
from ivcap_api.infrastructure.logging.logger import set_request_context

_PROJECT = {"urn": "urn:ivcap:project:1", "name": "p1", "status": "active"}


def test_authorization_header_rule() -> None:
    assert authorization_header("abc.def.ghi") == "Bearer abc.def.ghi"
    assert authorization_header("Basic dXNlcjpwdw==") == "Basic dXNlcjpwdw=="
    assert authorization_header("Bearer abc") == "Bearer abc"


def test_query_bool() -> None:
    assert query_bool(True) == "true"
    assert query_bool(False) == "false"


@pytest.mark.asyncio
@respx.mock
async def test_token_without_space_is_sent_as_bearer(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        route = respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(200, json=_PROJECT)
        )
        await client.read({}, project_payloads.ReadPayload(id="p1", jwt="tok123"))

        headers = route.calls.last.request.headers
        assert headers["Authorization"] == "Bearer tok123"
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"] == ivcap_settings.user_agent
        assert headers["X-Request-ID"]


@pytest.mark.asyncio
@respx.mock
async def test_token_with_space_is_sent_verbatim(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        route = respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(200, json=_PROJECT)
        )
        await client.read({}, project_payloads.ReadPayload(id="p1", jwt="Custom xyz"))
        assert route.calls.last.request.headers["Authorization"] == "Custom xyz"


@pytest.mark.asyncio
@respx.mock
async def test_settings_token_is_the_fallback() -> None:
    cfg = IvcapSettings(base_url="http://ivcap.test", jwt="from-env")  # type: ignore[arg-type]
    async with httpx.AsyncClient() as http:
        client = ProjectClient(cfg, http=http)
        route = respx.get("http://ivcap.test/1/project/p1").mock(
            return_value=httpx.Response(200, json=_PROJECT)
        )
        await client.read({}, project_payloads.ReadPayload(id="p1"))
        assert route.calls.last.request.headers["Authorization"] == "Bearer from-env"


@pytest.mark.asyncio
@respx.mock
async def test_no_token_means_no_authorization_header(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        route = respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(200, json=_PROJECT)
        )
        await client.read({}, project_payloads.ReadPayload(id="p1"))
        assert "Authorization" not in route.calls.last.request.headers


@pytest.mark.asyncio
@respx.mock
async def test_request_id_comes_from_context(ivcap_settings: IvcapSettings) -> None:
    set_request_context(request_id="rid-42")
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        route = respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(200, json=_PROJECT)
        )
        await client.read({}, project_payloads.ReadPayload(id="p1"))
        assert route.calls.last.request.headers["X-Request-ID"] == "rid-42"


@pytest.mark.asyncio
@respx.mock
async def test_project_read_404_decodes_resource_not_found(
    ivcap_settings: IvcapSettings,
) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/project/abc").mock(
            return_value=httpx.Response(404, json={"id": "abc", "message": "not found"})
        )
        with pytest.raises(ResourceNotFound) as ei:
            await client.read({}, project_payloads.ReadPayload(id="abc"))
        assert ei.value == ResourceNotFound(id="abc", message="not found")


@pytest.mark.parametrize(
    ("status", "body", "expected"),
    [
        (400, {"message": "bad"}, BadRequest(message="bad")),
        (403, {"id": "e1", "message": "scopes"}, InvalidScopes(message="scopes", id="e1")),
        (404, {"id": "o1", "message": "gone"}, ResourceNotFound(id="o1", message="gone")),
        (
            422,
            {"name": "limit", "message": "too big", "value": "99"},
            InvalidParameter(name="limit", message="too big", value="99"),
        ),
        (501, {"message": "later"}, ServiceNotImplemented(message="later")),
    ],
)
@pytest.mark.asyncio
@respx.mock
async def test_documented_error_statuses_decode_typed_errors(
    ivcap_settings: IvcapSettings, status: int, body: dict, expected: ServiceError
) -> None:
    async with httpx.AsyncClient() as http:
        client = OrderClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/orders/o1/products").mock(
            return_value=httpx.Response(status, json=body)
        )
        with pytest.raises(ServiceError) as ei:
            await client.products({}, order_payloads.ProductsPayload(order_id="o1"))
        assert ei.value == expected


@pytest.mark.parametrize(
    ("status", "expected"), [(401, Unauthorized), (503, ServiceNotAvailable)]
)
@pytest.mark.asyncio
@respx.mock
async def test_bodiless_errors_ignore_the_body(
    ivcap_settings: IvcapSettings, status: int, expected: type[ServiceError]
) -> None:
    async with httpx.AsyncClient() as http:
        client = OrderClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/orders/o1/products").mock(
            return_value=httpx.Response(status, content=b"<html>nope</html>")
        )
        with pytest.raises(expected):
            await client.products({}, order_payloads.ProductsPayload(order_id="o1"))


def test_lookup_errors_cover_every_documented_status() -> None:
    assert sorted(e.status_code for e in LOOKUP_ERRORS) == [400, 401, 403, 404, 422, 501, 503]


@pytest.mark.asyncio
@respx.mock
async def test_undocumented_status_is_invalid_response(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        respx.delete(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(404, text="no such project")
        )
        with pytest.raises(InvalidResponseError) as ei:
            await client.delete({}, project_payloads.DeletePayload(id="p1"))
        assert ei.value.status_code == 404
        assert ei.value.body == "no such project"
        assert ei.value.service == "project"
        assert ei.value.method == "delete"


@pytest.mark.asyncio
@respx.mock
async def test_malformed_json_is_decoding_error(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(200, content=b"{not json")
        )
        with pytest.raises(DecodingError) as ei:
            await client.read({}, project_payloads.ReadPayload(id="p1"))
        assert str(ei.value).startswith("project.read: failed to decode response body")


@pytest.mark.asyncio
@respx.mock
async def test_wrong_field_type_is_decoding_error(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(200, json={"urn": ["not", "a", "string"]})
        )
        with pytest.raises(DecodingError) as ei:
            await client.read({}, project_payloads.ReadPayload(id="p1"))
        assert ei.value.reason.startswith("urn:")


@pytest.mark.asyncio
@respx.mock
async def test_missing_required_field_is_response_validation_error(
    ivcap_settings: IvcapSettings,
) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(200, json={"name": "p1", "status": "bogus"})
        )
        with pytest.raises(ResponseValidationError) as ei:
            await client.read({}, project_payloads.ReadPayload(id="p1"))
        assert [v.name for v in ei.value.violations] == ["body.urn", "body.status"]


@pytest.mark.asyncio
@respx.mock
async def test_error_body_missing_required_field(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(404, json={"message": "not found"})
        )
        with pytest.raises(ResponseValidationError) as ei:
            await client.read({}, project_payloads.ReadPayload(id="p1"))
        assert [v.name for v in ei.value.violations] == ["body.id"]


@pytest.mark.asyncio
@respx.mock
async def test_malformed_error_body_is_decoding_error(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            return_value=httpx.Response(400, content=b"oops")
        )
        with pytest.raises(DecodingError):
            await client.read({}, project_payloads.ReadPayload(id="p1"))


@pytest.mark.asyncio
@respx.mock
async def test_network_failure_is_request_error(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = ProjectClient(ivcap_settings, http=http)
        respx.get(f"{ivcap_settings.base_url}/1/project/p1").mock(
            side_effect=httpx.ConnectError("connection refused")
        )
        with pytest.raises(RequestError) as ei:
            await client.read({}, project_payloads.ReadPayload(id="p1"))
        assert ei.value.reason == "connection refused"
        assert isinstance(ei.value.__cause__, httpx.ConnectError)


# ------------------------------ restore_body ------------------------------- #


class _OneShotBody(httpx.AsyncByteStream):
    """Body that is only buffered on the response when someone reads it."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield self._data

    async def aclose(self) -> None:
        return None


def _transport_and_hook() -> tuple[httpx.MockTransport, list[httpx.Response], dict]:
    seen: list[httpx.Response] = []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=_OneShotBody(json.dumps(_PROJECT).encode()))

    async def on_response(response: httpx.Response) -> None:
        seen.append(response)

    return httpx.MockTransport(handler), seen, {"response": [on_response]}


@pytest.mark.asyncio
async def test_restore_body_keeps_the_body_on_the_response(
    ivcap_settings: IvcapSettings,
) -> None:
    transport, seen, hooks = _transport_and_hook()
    async with httpx.AsyncClient(transport=transport, event_hooks=hooks) as http:
        client = ProjectClient(ivcap_settings, http=http, restore_body=True)
        result = await client.read({}, project_payloads.ReadPayload(id="p1"))

    assert result.urn == "urn:ivcap:project:1"
    assert json.loads(seen[0].content) == _PROJECT
    assert seen[0].is_closed


@pytest.mark.asyncio
async def test_without_restore_body_the_body_is_consumed(ivcap_settings: IvcapSettings) -> None:
    transport, seen, hooks = _transport_and_hook()
    async with httpx.AsyncClient(transport=transport, event_hooks=hooks) as http:
        client = ProjectClient(ivcap_settings, http=http)
        result = await client.read({}, project_payloads.ReadPayload(id="p1"))

    assert result.name == "p1"
    assert seen[0].is_closed
    with pytest.raises(httpx.ResponseNotRead):
        _ = seen[0].content


@pytest.mark.asyncio
async def test_restore_body_defaults_to_settings() -> None:
    cfg = IvcapSettings(base_url="http://ivcap.test", restore_body=True)
    transport, seen, hooks = _transport_and_hook()
    async with httpx.AsyncClient(transport=transport, event_hooks=hooks) as http:
        client = ProjectClient(cfg, http=http)
        await client.read({}, project_payloads.ReadPayload(id="p1"))
    assert json.loads(seen[0].content) == _PROJECT


# ------------------------------ client ownership ---------------------------- #


@pytest.mark.asyncio
async def test_injected_client_is_not_closed(ivcap_settings: IvcapSettings) -> None:
    async with httpx.AsyncClient() as http:
        async with ProjectClient(ivcap_settings, http=http):
            pass
        assert not http.is_closed


@pytest.mark.asyncio
async def test_owned_client_is_closed_on_exit(ivcap_settings: IvcapSettings) -> None:
    async with ProjectClient(ivcap_settings) as client:
        owned = client._client
        assert owned.timeout.read == ivcap_settings.timeout_s
    assert owned.is_closed
