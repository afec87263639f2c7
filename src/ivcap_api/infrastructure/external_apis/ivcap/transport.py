# src/ivcap_api/infrastructure/external_apis/ivcap/transport.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""IVCAP Transport Client (base) for the order, project and queue resources.

This transport is framework-agnostic and provides:

* Async HTTP (httpx) over an injected or owned ``httpx.AsyncClient``.
* The bearer rule: a token without a space is sent as ``Bearer <token>``;
  a token containing a space is sent verbatim.
* Status-code dispatch driven by a declarative :class:`Operation` table:
  the success status decodes into a result, documented error statuses
  decode into typed service errors, anything else is an invalid response.
* Body decoding through pydantic wire models, then projection into the view
  named by the ``goa-view`` response header (``default`` when absent),
  validation and materialization into domain results.
* Streaming results handed to the caller unread.

No timeout, retry or backoff policy is applied beyond what the underlying
``httpx.AsyncClient`` is configured with.
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, NoReturn

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ivcap_api.domain.exceptions.service import (
    BadRequest,
    InvalidParameter,
    InvalidScopes,
    ResourceNotFound,
    ServiceError,
    ServiceNotAvailable,
    ServiceNotImplemented,
    Unauthorized,
)
from ivcap_api.domain.exceptions.transport import (
    DecodingError,
    InvalidResponseError,
    RequestError,
    ResponseValidationError,
)
from ivcap_api.domain.exceptions.validation import ValidationError
from ivcap_api.domain.validation import Violations, missing_field
from ivcap_api.domain.views import DEFAULT_VIEW, ResultView, from_mapping, materialize, validate
from ivcap_api.infrastructure.external_apis.ivcap.settings import (
    IvcapSettings,
    get_ivcap_settings,
)
from ivcap_api.infrastructure.external_apis.ivcap.wire import ErrorBody, WireModel
from ivcap_api.infrastructure.logging.logger import get_json_logger, new_request_id

__all__ = [
    "Operation",
    "IvcapHTTPClient",
    "VIEW_HEADER",
    "authorization_header",
    "query_bool",
    "list_query",
    "READ_ERRORS",
    "LIST_ERRORS",
    "MUTATION_ERRORS",
    "LOOKUP_ERRORS",
    "DELETE_ERRORS",
]

log = get_json_logger(__name__)

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
}
# Response header naming the view the server rendered; empty means default.
VIEW_HEADER: Final[str] = "goa-view"

# --------------------------------------------------------------------------- #
# Error tables (status -> error type)
# --------------------------------------------------------------------------- #

_BASE: Final[tuple[type[ServiceError], ...]] = (
    BadRequest,
    InvalidScopes,
    ServiceNotImplemented,
    ServiceNotAvailable,
    Unauthorized,
)

# Listing and creating: no lookup by id, so no 404.
LIST_ERRORS: Final[tuple[type[ServiceError], ...]] = (*_BASE, InvalidParameter)
# Deleting: idempotent, so neither 404 nor 422.
DELETE_ERRORS: Final[tuple[type[ServiceError], ...]] = _BASE
# Reading by id.
READ_ERRORS: Final[tuple[type[ServiceError], ...]] = (*_BASE, ResourceNotFound)
# Parameterised operations on an existing resource.
LOOKUP_ERRORS: Final[tuple[type[ServiceError], ...]] = (
    *_BASE,
    InvalidParameter,
    ResourceNotFound,
)
MUTATION_ERRORS: Final[tuple[type[ServiceError], ...]] = LOOKUP_ERRORS


def authorization_header(token: str) -> str:
    """Return the ``Authorization`` value for ``token``.

    A token that already embeds a scheme (contains a space) is passed through
    verbatim; anything else is sent as a bearer token.
    """
    return token if " " in token else f"Bearer {token}"


@dataclass(frozen=True, slots=True)
class Operation:
    """Static description of one HTTP operation.

    Attributes:
        service: Service name, used in error messages.
        method: Method name, used in error messages.
        http_method: HTTP verb.
        success: Status code of a successful response.
        errors: Service errors the operation documents, keyed by their status.
        body: Wire model (or ``TypeAdapter`` for collections) of the success
            body; ``None`` when the success response has no body.
        views: View table of the result type.
        stream: Hand the open response to the caller instead of decoding it.
    """

    service: str
    method: str
    http_method: str
    success: int
    errors: Sequence[type[ServiceError]]
    body: type[BaseModel] | TypeAdapter[Any] | None = None
    views: ResultView | None = None
    stream: bool = False

    def error_for(self, status: int) -> type[ServiceError] | None:
        for err in self.errors:
            if err.status_code == status:
                return err
        return None


def _to_mapping(item: Any) -> Any:
    if isinstance(item, WireModel):
        return item.to_domain()
    if isinstance(item, BaseModel):
        return item.model_dump()
    return item


class IvcapHTTPClient:
    """Shared transport for the resource clients.

    Subclasses declare :class:`Operation` tables and call :meth:`_call`.
    """

    def __init__(
        self,
        settings: IvcapSettings | None = None,
        *,
        http: httpx.AsyncClient | None = None,
        restore_body: bool | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            settings: Client settings; loaded from the environment if omitted.
            http: Optional shared ``httpx.AsyncClient`` (the "doer"). If
                omitted, a client is created and owned by this instance.
            restore_body: Keep each decoded body buffered on its
                ``httpx.Response`` so hooks can read it again. Defaults to
                ``settings.restore_body``.
        """
        self._settings = settings or get_ivcap_settings()
        self._base_url = str(self._settings.base_url).rstrip("/")
        self._restore_body = (
            self._settings.restore_body if restore_body is None else bool(restore_body)
        )
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(timeout=self._settings.timeout_s)

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> IvcapHTTPClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------ Requests ------------------------------ #

    def _headers(self, token: str, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        headers = {
            **_DEFAULT_HEADERS,
            "User-Agent": self._settings.user_agent,
            "X-Request-ID": new_request_id(),
        }
        effective = token or self._settings.default_token
        if effective:
            headers["Authorization"] = authorization_header(effective)
        if extra:
            headers.update(extra)
        return headers

    async def _send(
        self,
        op: Operation,
        path: str,
        *,
        token: str,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        request = self._client.build_request(
            op.http_method,
            f"{self._base_url}{path}",
            params=params or None,
            json=json,
            content=content,
            headers=self._headers(token, headers),
        )
        started = time.perf_counter()
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            log.warning(
                "ivcap.request_failed",
                extra={
                    "extra": {
                        "service": op.service,
                        "method": op.method,
                        "error": type(exc).__name__,
                    }
                },
            )
            raise RequestError(op.service, op.method, str(exc) or type(exc).__name__) from exc
        log.debug(
            "ivcap.call",
            extra={
                "extra": {
                    "service": op.service,
                    "method": op.method,
                    "status": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                }
            },
        )
        return response

    async def _call(
        self,
        op: Operation,
        path: str,
        *,
        token: str,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send the request and decode the response per ``op``."""
        response = await self._send(
            op, path, token=token, params=params, json=json, content=content, headers=headers
        )
        if op.stream and response.status_code == op.success:
            return response
        try:
            raw = await self._read(response)
        except httpx.HTTPError as exc:
            raise RequestError(op.service, op.method, str(exc) or type(exc).__name__) from exc
        finally:
            await response.aclose()
        view = response.headers.get(VIEW_HEADER) or DEFAULT_VIEW
        return self._decode(op, response.status_code, raw, view)

    async def _read(self, response: httpx.Response) -> bytes:
        if self._restore_body:
            return await response.aread()
        return b"".join([chunk async for chunk in response.aiter_bytes()])

    # ------------------------------ Decoding ------------------------------ #

    def _decode(
        self, op: Operation, status: int, content: bytes, view: str = DEFAULT_VIEW
    ) -> Any:
        if status == op.success:
            return self._decode_success(op, content, view)
        error_type = op.error_for(status)
        if error_type is None:
            raise InvalidResponseError(
                op.service, op.method, status, content.decode("utf-8", errors="replace")
            )
        self._raise_service_error(op, error_type, content)

    def _decode_success(self, op: Operation, content: bytes, view: str) -> Any:
        if op.body is None:
            return None
        try:
            if isinstance(op.body, TypeAdapter):
                decoded: Any = op.body.validate_json(content)
            else:
                decoded = op.body.model_validate_json(content)
        except PydanticValidationError as exc:
            raise DecodingError(op.service, op.method, _describe(exc)) from exc

        if op.views is None:
            return decoded
        try:
            if isinstance(decoded, list):
                return [self._to_result(op.views, item, view) for item in decoded]
            return self._to_result(op.views, decoded, view)
        except ValidationError as exc:
            raise ResponseValidationError(op.service, op.method, exc) from exc

    @staticmethod
    def _to_result(views: ResultView, item: Any, view: str) -> Any:
        viewed = from_mapping(views, _to_mapping(item), view)
        validate(viewed, root="body")
        return materialize(viewed)

    @staticmethod
    def _raise_service_error(
        op: Operation, error_type: type[ServiceError], content: bytes
    ) -> NoReturn:
        if not error_type.body_fields:
            raise error_type.from_body({})
        try:
            body = ErrorBody.model_validate_json(content)
        except PydanticValidationError as exc:
            raise DecodingError(op.service, op.method, _describe(exc)) from exc
        values = body.model_dump()
        violations = Violations()
        for name in error_type.required_fields:
            if values.get(name) is None:
                violations.add(missing_field(name, "body"))
        error = violations.error()
        if error is not None:
            raise ResponseValidationError(op.service, op.method, error)
        raise error_type.from_body(values)


def _describe(exc: PydanticValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ())) or "body"
    return f"{loc}: {first.get('msg', str(exc))}"


def query_bool(value: bool) -> str:
    """Render a boolean query value as ``true`` or ``false``."""
    return "true" if value else "false"


def list_query(payload: Any) -> dict[str, str]:
    """Query of a list operation.

    ``limit`` and ``order-desc`` are always sent; the other filters only when
    set.
    """
    params = {"limit": str(payload.limit)}
    if payload.page is not None:
        params["page"] = payload.page
    if payload.filter is not None:
        params["filter"] = payload.filter
    if payload.order_by is not None:
        params["order-by"] = payload.order_by
    params["order-desc"] = query_bool(payload.order_desc)
    if payload.at_time is not None:
        params["at-time"] = payload.at_time
    return params
