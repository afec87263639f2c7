# tests/unit/tasks/test_ivcap_cli.py
from __future__ import annotations

import json

import httpx
import pytest
import respx
from typer.testing import CliRunner

from ivcap_api.tasks.cli import app

BASE_URL = "http://cli.ivcap.test"
QUEUE = "urn:ivcap:queue:1"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _cli_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IVCAP_BASE_URL", BASE_URL)
    monkeypatch.setenv("IVCAP_JWT", "env-token")


@respx.mock
def test_order_list_prints_json() -> None:
    route = respx.get(f"{BASE_URL}/1/orders").mock(
        return_value=httpx.Response(
            200, json={"items": [], "at-time": "2024-01-01T00:00:00Z", "links": []}
        )
    )

    result = runner.invoke(app, ["order", "list", "--limit", "5", "--order-desc", "true"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "items": [],
        "at_time": "2024-01-01T00:00:00Z",
        "links": [],
    }
    request = route.calls.last.request
    assert request.url.params["limit"] == "5"
    assert request.url.params["order-desc"] == "true"
    assert request.headers["Authorization"] == "Bearer env-token"


@respx.mock
def test_jwt_flag_overrides_environment() -> None:
    route = respx.delete(f"{BASE_URL}/1/queues/{QUEUE}").mock(return_value=httpx.Response(204))

    result = runner.invoke(app, ["queue", "delete", "--id", QUEUE, "--jwt", "flag-token"])

    assert result.exit_code == 0, result.output
    assert result.stdout == ""
    assert route.calls.last.request.headers["Authorization"] == "Bearer flag-token"


@respx.mock
def test_order_logs_streams_to_stdout() -> None:
    respx.get(f"{BASE_URL}/1/orders/urn:ivcap:order:1/logs").mock(
        return_value=httpx.Response(200, content=b"started\nfinished\n")
    )

    result = runner.invoke(app, ["order", "logs", "--order-id", "urn:ivcap:order:1"])

    assert result.exit_code == 0, result.output
    assert result.stdout == "started\nfinished\n"


@respx.mock
def test_order_metadata_prints_the_page() -> None:
    route = respx.get(f"{BASE_URL}/1/orders/urn:ivcap:order:1/metadata").mock(
        return_value=httpx.Response(200, json={"items": [], "links": []})
    )

    result = runner.invoke(
        app, ["order", "metadata", "--order-id", "urn:ivcap:order:1", "--limit", "2"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"items": [], "links": []}
    assert route.calls.last.request.url.params["limit"] == "2"

@respx.mock
def test_queue_enqueue() -> None:
    route = respx.post(f"{BASE_URL}/1/queues/{QUEUE}/messages").mock(
        return_value=httpx.Response(200, json={"id": "urn:ivcap:message:1"})
    )

    result = runner.invoke(
        app,
        ["queue", "enqueue", "--id", QUEUE, "--content", '{"a": 1}', "--schema", "urn:s"],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"id": "urn:ivcap:message:1"}
    assert route.calls.last.request.url.params["schema"] == "urn:s"


def test_bad_flag_exits_before_any_request() -> None:
    with respx.mock(assert_all_mocked=True) as mock:
        result = runner.invoke(app, ["queue", "list", "--limit", "0"])
        assert not mock.calls

    assert result.exit_code == 1
    assert "error: limit must be greater or equal than 1 but got value 0" in result.output


def test_unparsable_flag_reports_the_expected_type() -> None:
    result = runner.invoke(app, ["order", "list", "--order-desc", "maybe"])
    assert result.exit_code == 1
    assert "invalid value for orderDesc, must be BOOL" in result.output


@respx.mock
def test_service_error_exits_with_status_1() -> None:
    respx.get(f"{BASE_URL}/1/project/p1").mock(
        return_value=httpx.Response(404, json={"id": "p1", "message": "not found"})
    )

    result = runner.invoke(app, ["project", "read", "--id", "p1"])

    assert result.exit_code == 1
    assert "error: not found" in result.output


@respx.mock
def test_project_members_prints_list() -> None:
    respx.get(f"{BASE_URL}/1/project/urn:ivcap:project:1/members").mock(
        return_value=httpx.Response(
            200, json={"members": [{"urn": "urn:ivcap:user:1", "role": "owner"}]}
        )
    )

    result = runner.invoke(app, ["project", "members", "--urn", "urn:ivcap:project:1"])

    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["members"] == [{"urn": "urn:ivcap:user:1", "email": None, "role": "owner"}]
