# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""IVCAP CLI: call the order, project and queue services from a shell.

Commands:
    order     list | read | create | products | metadata | logs | top
    project   list | create | delete | read | members | update-membership |
              remove-membership | default | set-default | account | set-account
    queue     create | read | delete | list | enqueue | dequeue

Environment:
    IVCAP_BASE_URL     Base URL of the API (default http://localhost:8080).
    IVCAP_JWT          Token used when ``--jwt`` is not given.
    IVCAP_TIMEOUT_S    Per-request timeout in seconds.
    IVCAP_LOG_LEVEL    Log level of the JSON logs written to stderr.

Flags are parsed with the same rules the server applies, so malformed values
fail before any request is sent. Results are printed as JSON.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer

from ivcap_api.domain.exceptions.base import DomainError
from ivcap_api.infrastructure.external_apis.ivcap.order import cli as order_cli
from ivcap_api.infrastructure.external_apis.ivcap.order.client import OrderClient
from ivcap_api.infrastructure.external_apis.ivcap.project import cli as project_cli
from ivcap_api.infrastructure.external_apis.ivcap.project.client import ProjectClient
from ivcap_api.infrastructure.external_apis.ivcap.queue import cli as queue_cli
from ivcap_api.infrastructure.external_apis.ivcap.queue.client import QueueClient
from ivcap_api.infrastructure.external_apis.ivcap.transport import IvcapHTTPClient
from ivcap_api.infrastructure.logging.logger import configure_root_logging, get_json_logger

configure_root_logging()
log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)
order_app = typer.Typer(no_args_is_help=True, help="Manage orders of services.")
project_app = typer.Typer(no_args_is_help=True, help="Manage projects and memberships.")
queue_app = typer.Typer(no_args_is_help=True, help="Manage queues and their messages.")
app.add_typer(order_app, name="order")
app.add_typer(project_app, name="project")
app.add_typer(queue_app, name="queue")

C = TypeVar("C", bound=IvcapHTTPClient)


def _jwt() -> Any:
    return typer.Option("", "--jwt", help="Bearer token; falls back to IVCAP_JWT.")


def _to_jsonable(result: Any) -> Any:
    if dataclasses.is_dataclass(result) and not isinstance(result, type):
        return dataclasses.asdict(result)
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


def _fail(command: str, exc: DomainError) -> typer.Exit:
    log.error(
        "cli.command_failed",
        extra={"extra": {"command": command, "error": exc.error_name, "detail": str(exc)}},
    )
    typer.echo(f"error: {exc}", err=True)
    return typer.Exit(code=1)


def _run(
    command: str,
    client_cls: type[C],
    build: Callable[[], Any],
    call: Callable[[C, Any], Awaitable[Any]],
) -> None:
    """Build the payload, call the service and print the result.

    Any :class:`DomainError` (bad flags, service errors, transport errors) is
    logged and turns into exit status 1.
    """

    async def _go(payload: Any) -> Any:
        async with client_cls() as client:
            return await call(client, payload)

    try:
        payload = build()
        result = asyncio.run(_go(payload))
    except DomainError as exc:
        raise _fail(command, exc) from exc
    if result is not None:
        typer.echo(json.dumps(_to_jsonable(result), indent=2, default=str))


# --------------------------------- order ---------------------------------- #


@order_app.command("list")
def order_list(
    limit: str = typer.Option("", help="Max. number of results (1..50)."),  # noqa: B008
    page: str = typer.Option("", help="Page token from a previous listing."),  # noqa: B008
    filter: str = typer.Option("", help="Filter expression."),  # noqa: A002, B008
    order_by: str = typer.Option("", help="Field to order by."),  # noqa: B008
    order_desc: str = typer.Option("", help="Sort descending (bool)."),  # noqa: B008
    at_time: str = typer.Option("", help="List state as of this RFC3339 time."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """List orders."""
    _run(
        "order.list",
        OrderClient,
        lambda: order_cli.build_list_payload(
            limit, page, filter, order_by, order_desc, at_time, jwt
        ),
        lambda c, p: c.list({}, p),
    )


@order_app.command("read")
def order_read(
    id: str = typer.Option(..., help="Order id."),  # noqa: A002, B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Show the status of one order."""
    _run(
        "order.read",
        OrderClient,
        lambda: order_cli.build_read_payload(id, jwt),
        lambda c, p: c.read({}, p),
    )


@order_app.command("create")
def order_create(
    body: str = typer.Option(..., help="Order request as JSON."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Create an order."""
    _run(
        "order.create",
        OrderClient,
        lambda: order_cli.build_create_payload(body, jwt),
        lambda c, p: c.create({}, p),
    )


@order_app.command("products")
def order_products(
    order_id: str = typer.Option(..., help="Order reference."),  # noqa: B008
    limit: str = typer.Option("", help="Max. number of results (1..50)."),  # noqa: B008
    page: str = typer.Option("", help="Page token from a previous listing."),  # noqa: B008
    order_by: str = typer.Option("", help="Field to order by."),  # noqa: B008
    order_desc: str = typer.Option("", help="Sort descending (bool)."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """List the products of an order."""
    _run(
        "order.products",
        OrderClient,
        lambda: order_cli.build_products_payload(
            order_id, limit, page, order_by, order_desc, jwt
        ),
        lambda c, p: c.products({}, p),
    )


@order_app.command("metadata")
def order_metadata(
    order_id: str = typer.Option(..., help="Order reference."),  # noqa: B008
    limit: str = typer.Option("", help="Max. number of results (1..50)."),  # noqa: B008
    page: str = typer.Option("", help="Page token from a previous listing."),  # noqa: B008
    order_by: str = typer.Option("", help="Field to order by."),  # noqa: B008
    order_desc: str = typer.Option("", help="Sort descending (bool)."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """List the metadata attached to an order."""
    _run(
        "order.metadata",
        OrderClient,
        lambda: order_cli.build_metadata_payload(
            order_id, limit, page, order_by, order_desc, jwt
        ),
        lambda c, p: c.metadata({}, p),
    )


@order_app.command("logs")
def order_logs(
    order_id: str = typer.Option(..., help="Order reference."),  # noqa: B008
    from_: str = typer.Option("", "--from", help="Start time (unix seconds)."),  # noqa: B008
    to: str = typer.Option("", help="End time (unix seconds)."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Stream the logs of an order to stdout."""

    async def _stream(client: OrderClient, payload: Any) -> None:
        response = await client.logs({}, payload)
        try:
            async for chunk in response.aiter_bytes():
                typer.echo(chunk.decode("utf-8", errors="replace"), nl=False)
        finally:
            await response.aclose()

    _run(
        "order.logs",
        OrderClient,
        lambda: order_cli.build_logs_payload(order_id, from_, to, jwt),
        _stream,
    )


@order_app.command("top")
def order_top(
    order_id: str = typer.Option(..., help="Order reference."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Show resource usage per container of a running order."""
    _run(
        "order.top",
        OrderClient,
        lambda: order_cli.build_top_payload(order_id, jwt),
        lambda c, p: c.top({}, p),
    )


# -------------------------------- project --------------------------------- #


@project_app.command("list")
def project_list(
    limit: str = typer.Option("", help="Max. number of results (1..50)."),  # noqa: B008
    page: str = typer.Option("", help="Page token from a previous listing."),  # noqa: B008
    filter: str = typer.Option("", help="Filter expression."),  # noqa: A002, B008
    order_by: str = typer.Option("", help="Field to order by."),  # noqa: B008
    order_desc: str = typer.Option("", help="Sort descending (bool)."),  # noqa: B008
    at_time: str = typer.Option("", help="List state as of this RFC3339 time."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """List projects."""
    _run(
        "project.list",
        ProjectClient,
        lambda: project_cli.build_list_payload(
            limit, page, filter, order_by, order_desc, at_time, jwt
        ),
        lambda c, p: c.list({}, p),
    )


@project_app.command("create")
def project_create(
    body: str = typer.Option(..., help="Project as JSON."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Create a project."""
    _run(
        "project.create",
        ProjectClient,
        lambda: project_cli.build_create_project_payload(body, jwt),
        lambda c, p: c.create_project({}, p),
    )


@project_app.command("delete")
def project_delete(
    id: str = typer.Option(..., help="Project id."),  # noqa: A002, B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Delete a project."""
    _run(
        "project.delete",
        ProjectClient,
        lambda: project_cli.build_delete_payload(id, jwt),
        lambda c, p: c.delete({}, p),
    )


@project_app.command("read")
def project_read(
    id: str = typer.Option(..., help="Project id."),  # noqa: A002, B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Show a project."""
    _run(
        "project.read",
        ProjectClient,
        lambda: project_cli.build_read_payload(id, jwt),
        lambda c, p: c.read({}, p),
    )


@project_app.command("members")
def project_members(
    urn: str = typer.Option(..., help="Project URN."),  # noqa: B008
    role: str = typer.Option("", help="Only members with this role."),  # noqa: B008
    limit: str = typer.Option("", help="Max. number of results (1..50)."),  # noqa: B008
    page: str = typer.Option("", help="Page token from a previous listing."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """List the members of a project."""
    _run(
        "project.members",
        ProjectClient,
        lambda: project_cli.build_list_project_members_payload(urn, role, limit, page, jwt),
        lambda c, p: c.list_project_members({}, p),
    )


@project_app.command("update-membership")
def project_update_membership(
    body: str = typer.Option(..., help='Membership as JSON, e.g. {"role": "owner"}.'),  # noqa: B008
    project_urn: str = typer.Option(..., help="Project URN."),  # noqa: B008
    user_urn: str = typer.Option(..., help="User URN."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Add a user to a project or change their role."""
    _run(
        "project.update_membership",
        ProjectClient,
        lambda: project_cli.build_update_membership_payload(body, project_urn, user_urn, jwt),
        lambda c, p: c.update_membership({}, p),
    )


@project_app.command("remove-membership")
def project_remove_membership(
    project_urn: str = typer.Option(..., help="Project URN."),  # noqa: B008
    user_urn: str = typer.Option(..., help="User URN."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Remove a user from a project."""
    _run(
        "project.remove_membership",
        ProjectClient,
        lambda: project_cli.build_remove_membership_payload(project_urn, user_urn, jwt),
        lambda c, p: c.remove_membership({}, p),
    )


@project_app.command("default")
def project_default(jwt: str = _jwt()) -> None:  # noqa: B008
    """Show the caller's default project."""
    _run(
        "project.default_project",
        ProjectClient,
        lambda: project_cli.build_default_project_payload(jwt),
        lambda c, p: c.default_project({}, p),
    )


@project_app.command("set-default")
def project_set_default(
    body: str = typer.Option(..., help="Default project selection as JSON."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Set the default project of a user."""
    _run(
        "project.set_default_project",
        ProjectClient,
        lambda: project_cli.build_set_default_project_payload(body, jwt),
        lambda c, p: c.set_default_project({}, p),
    )


@project_app.command("account")
def project_account(
    project_urn: str = typer.Option(..., help="Project URN."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Show the billing account of a project."""
    _run(
        "project.project_account",
        ProjectClient,
        lambda: project_cli.build_project_account_payload(project_urn, jwt),
        lambda c, p: c.project_account({}, p),
    )


@project_app.command("set-account")
def project_set_account(
    body: str = typer.Option(..., help="Account selection as JSON."),  # noqa: B008
    project_urn: str = typer.Option(..., help="Project URN."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Set the billing account of a project."""
    _run(
        "project.set_project_account",
        ProjectClient,
        lambda: project_cli.build_set_project_account_payload(body, project_urn, jwt),
        lambda c, p: c.set_project_account({}, p),
    )


# --------------------------------- queue ---------------------------------- #


@queue_app.command("create")
def queue_create(
    body: str = typer.Option(..., help="Queue as JSON."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Create a queue."""
    _run(
        "queue.create",
        QueueClient,
        lambda: queue_cli.build_create_payload(body, jwt),
        lambda c, p: c.create({}, p),
    )


@queue_app.command("read")
def queue_read(
    id: str = typer.Option(..., help="Queue reference."),  # noqa: A002, B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Show a queue and its statistics."""
    _run(
        "queue.read",
        QueueClient,
        lambda: queue_cli.build_read_payload(id, jwt),
        lambda c, p: c.read({}, p),
    )


@queue_app.command("delete")
def queue_delete(
    id: str = typer.Option(..., help="Queue reference."),  # noqa: A002, B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Delete a queue."""
    _run(
        "queue.delete",
        QueueClient,
        lambda: queue_cli.build_delete_payload(id, jwt),
        lambda c, p: c.delete({}, p),
    )


@queue_app.command("list")
def queue_list(
    limit: str = typer.Option("", help="Max. number of results (1..50)."),  # noqa: B008
    page: str = typer.Option("", help="Page token from a previous listing."),  # noqa: B008
    filter: str = typer.Option("", help="Filter expression."),  # noqa: A002, B008
    order_by: str = typer.Option("", help="Field to order by."),  # noqa: B008
    order_desc: str = typer.Option("", help="Sort descending (bool)."),  # noqa: B008
    at_time: str = typer.Option("", help="List state as of this RFC3339 time."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """List queues."""
    _run(
        "queue.list",
        QueueClient,
        lambda: queue_cli.build_list_payload(
            limit, page, filter, order_by, order_desc, at_time, jwt
        ),
        lambda c, p: c.list({}, p),
    )


@queue_app.command("enqueue")
def queue_enqueue(
    id: str = typer.Option(..., help="Queue reference."),  # noqa: A002, B008
    content: str = typer.Option(..., help="Message content as JSON."),  # noqa: B008
    schema: str = typer.Option("", help="Schema of the content."),  # noqa: B008
    content_type: str = typer.Option("", help="Content type of the message."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Publish a message to a queue."""
    _run(
        "queue.enqueue",
        QueueClient,
        lambda: queue_cli.build_enqueue_payload(id, content, schema, content_type, jwt),
        lambda c, p: c.enqueue({}, p),
    )


@queue_app.command("dequeue")
def queue_dequeue(
    id: str = typer.Option(..., help="Queue reference."),  # noqa: A002, B008
    limit: str = typer.Option("", help="Max. number of messages."),  # noqa: B008
    jwt: str = _jwt(),  # noqa: B008
) -> None:
    """Fetch messages from a queue."""
    _run(
        "queue.dequeue",
        QueueClient,
        lambda: queue_cli.build_dequeue_payload(id, limit, jwt),
        lambda c, p: c.dequeue({}, p),
    )


if __name__ == "__main__":
    app()
