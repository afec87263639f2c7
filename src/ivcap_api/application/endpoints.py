# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Service Endpoints (Application Layer).

Purpose:
    Present every service method behind one uniform async shape,
    ``endpoint(ctx, payload) -> result``, with an authorization gate in front.

Layer:
    application

Design:
    :func:`authorize_then_call` is the only wrapper. It checks the payload
    type, awaits the injected authorizer with the payload's ``jwt`` and the
    method's :class:`ScopeRequirement`, then calls the method with the context
    the authorizer returned. Results of viewed types come back projected into
    the ``default`` view.

    The per-service bundles (:class:`OrderEndpoints`, ...) are built from a
    static table of ``method -> (payload type, view table)``.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Protocol, TypeVar

from ivcap_api.application.interfaces import CallContext
from ivcap_api.application.interfaces.order_service import OrderService
from ivcap_api.application.interfaces.project_service import ProjectService
from ivcap_api.application.interfaces.queue_service import QueueService
from ivcap_api.application.payloads import order as order_payloads
from ivcap_api.application.payloads import project as project_payloads
from ivcap_api.application.payloads import queue as queue_payloads
from ivcap_api.application.scopes import ScopeRequirement, requirement_for
from ivcap_api.domain.entities.order import (
    ORDER_LIST_VIEWS,
    ORDER_STATUS_VIEWS,
    META_LIST_VIEWS,
    ORDER_TOP_VIEWS,
    PRODUCT_LIST_VIEWS,
)
from ivcap_api.domain.entities.project import (
    ACCOUNT_VIEWS,
    MEMBERS_LIST_VIEWS,
    PROJECT_LIST_VIEWS,
    PROJECT_STATUS_VIEWS,
)
from ivcap_api.domain.entities.queue import (
    CREATE_QUEUE_VIEWS,
    MESSAGE_LIST_VIEWS,
    MESSAGE_STATUS_VIEWS,
    QUEUE_LIST_VIEWS,
    READ_QUEUE_VIEWS,
)
from ivcap_api.domain.exceptions.transport import InvalidPayloadTypeError
from ivcap_api.domain.views import DEFAULT_VIEW, ResultView, project

__all__ = [
    "Authorizer",
    "Endpoint",
    "authorize_then_call",
    "OrderEndpoints",
    "ProjectEndpoints",
    "QueueEndpoints",
]

Endpoint = Callable[[CallContext, Any], Awaitable[Any]]
Middleware = Callable[[Endpoint], Endpoint]


class Authorizer(Protocol):
    """Verify a bearer token against a scope requirement.

    Returns the (possibly enriched) context to hand to the method, or raises.
    """

    async def __call__(
        self, ctx: CallContext, token: str, requirement: ScopeRequirement
    ) -> CallContext: ...


def _project_result(views: ResultView, result: Any) -> Any:
    if isinstance(result, list):
        return [project(views, item, DEFAULT_VIEW) for item in result]
    return project(views, result, DEFAULT_VIEW)


def authorize_then_call(
    service: str,
    method: str,
    payload_type: type[Any],
    call: Callable[[CallContext, Any], Any],
    auth: Authorizer,
    *,
    views: ResultView | None = None,
) -> Endpoint:
    """Wrap a service method behind the authorization gate.

    Args:
        service: Service name (``order``, ``project``, ``queue``).
        method: Method name, used to look up the scope requirement.
        payload_type: Concrete payload class the method accepts.
        call: Bound service method.
        auth: Authorizer awaited before ``call``.
        views: View table of the result type, if it has views.

    Returns:
        Async endpoint ``(ctx, payload) -> result``.
    """
    requirement = requirement_for(service, method)

    async def endpoint(ctx: CallContext, payload: Any) -> Any:
        if not isinstance(payload, payload_type):
            raise InvalidPayloadTypeError(service, method, payload_type.__name__, payload)
        ctx = await auth(ctx, payload.jwt, requirement)
        result = call(ctx, payload)
        if inspect.isawaitable(result):
            result = await result
        if views is None or result is None:
            return result
        return _project_result(views, result)

    endpoint.__name__ = f"{service}_{method}_endpoint"
    return endpoint


T = TypeVar("T", bound="_Endpoints")


@dataclass(slots=True)
class _Endpoints:
    """Common builder for the per-service endpoint bundles.

    Subclasses set ``SERVICE`` and ``METHODS``, the map from method name to
    its payload type and result view table.
    """

    SERVICE: ClassVar[str]
    METHODS: ClassVar[Mapping[str, tuple[type[Any], ResultView | None]]]

    @classmethod
    def _wrap(cls: type[T], svc: Any, auth: Authorizer) -> T:
        """Wrap every method of ``svc`` listed in the bundle's table."""
        name = cls.SERVICE
        built = {
            method: authorize_then_call(
                name, method, payload_type, getattr(svc, method), auth, views=views
            )
            for method, (payload_type, views) in cls.METHODS.items()
        }
        return cls(**built)

    def use(self, middleware: Middleware) -> None:
        """Apply ``middleware`` to every endpoint of the bundle."""
        for f in fields(self):
            setattr(self, f.name, middleware(getattr(self, f.name)))


@dataclass(slots=True)
class OrderEndpoints(_Endpoints):
    """Endpoints of the order service."""

    list: Endpoint
    read: Endpoint
    create: Endpoint
    products: Endpoint
    metadata: Endpoint
    logs: Endpoint
    top: Endpoint

    SERVICE: ClassVar[str] = "order"
    METHODS: ClassVar[Mapping[str, tuple[type[Any], ResultView | None]]] = {
        "list": (order_payloads.ListPayload, ORDER_LIST_VIEWS),
        "read": (order_payloads.ReadPayload, ORDER_STATUS_VIEWS),
        "create": (order_payloads.CreatePayload, ORDER_STATUS_VIEWS),
        "products": (order_payloads.ProductsPayload, PRODUCT_LIST_VIEWS),
        "metadata": (order_payloads.MetadataPayload, META_LIST_VIEWS),
        "logs": (order_payloads.LogsPayload, None),
        "top": (order_payloads.TopPayload, ORDER_TOP_VIEWS),
    }

    @classmethod
    def new(cls, svc: OrderService, auth: Authorizer) -> OrderEndpoints:
        return cls._wrap(svc, auth)


@dataclass(slots=True)
class ProjectEndpoints(_Endpoints):
    """Endpoints of the project service."""

    list: Endpoint
    create_project: Endpoint
    delete: Endpoint
    read: Endpoint
    list_project_members: Endpoint
    update_membership: Endpoint
    remove_membership: Endpoint
    default_project: Endpoint
    set_default_project: Endpoint
    project_account: Endpoint
    set_project_account: Endpoint

    SERVICE: ClassVar[str] = "project"
    METHODS: ClassVar[Mapping[str, tuple[type[Any], ResultView | None]]] = {
        "list": (project_payloads.ListPayload, PROJECT_LIST_VIEWS),
        "create_project": (project_payloads.CreateProjectPayload, PROJECT_STATUS_VIEWS),
        "delete": (project_payloads.DeletePayload, None),
        "read": (project_payloads.ReadPayload, PROJECT_STATUS_VIEWS),
        "list_project_members": (
            project_payloads.ListProjectMembersPayload,
            MEMBERS_LIST_VIEWS,
        ),
        "update_membership": (project_payloads.UpdateMembershipPayload, None),
        "remove_membership": (project_payloads.RemoveMembershipPayload, None),
        "default_project": (project_payloads.DefaultProjectPayload, PROJECT_STATUS_VIEWS),
        "set_default_project": (project_payloads.SetDefaultProjectPayload, None),
        "project_account": (project_payloads.ProjectAccountPayload, ACCOUNT_VIEWS),
        "set_project_account": (project_payloads.SetProjectAccountPayload, None),
    }

    @classmethod
    def new(cls, svc: ProjectService, auth: Authorizer) -> ProjectEndpoints:
        return cls._wrap(svc, auth)


@dataclass(slots=True)
class QueueEndpoints(_Endpoints):
    """Endpoints of the queue service."""

    create: Endpoint
    read: Endpoint
    delete: Endpoint
    list: Endpoint
    enqueue: Endpoint
    dequeue: Endpoint

    SERVICE: ClassVar[str] = "queue"
    METHODS: ClassVar[Mapping[str, tuple[type[Any], ResultView | None]]] = {
        "create": (queue_payloads.CreatePayload, CREATE_QUEUE_VIEWS),
        "read": (queue_payloads.ReadPayload, READ_QUEUE_VIEWS),
        "delete": (queue_payloads.DeletePayload, None),
        "list": (queue_payloads.ListPayload, QUEUE_LIST_VIEWS),
        "enqueue": (queue_payloads.EnqueuePayload, MESSAGE_STATUS_VIEWS),
        "dequeue": (queue_payloads.DequeuePayload, MESSAGE_LIST_VIEWS),
    }

    @classmethod
    def new(cls, svc: QueueService, auth: Authorizer) -> QueueEndpoints:
        return cls._wrap(svc, auth)
