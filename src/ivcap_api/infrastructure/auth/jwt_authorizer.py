# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""JWT (HS256) Endpoint Authorizer.

Verifies the caller's bearer token and checks it carries the scopes the
method requires. On success the returned context holds the authenticated
:class:`Principal` under ``"principal"``.

Scopes are read from the ``scopes`` claim, falling back to ``scope``; both
space-separated strings and lists are accepted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import jwt
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from ivcap_api.application.interfaces import CallContext
from ivcap_api.application.scopes import ScopeRequirement
from ivcap_api.config.features.auth import AuthSettings, get_auth_settings
from ivcap_api.domain.exceptions.base import DomainError
from ivcap_api.domain.exceptions.service import InvalidCredentials, InvalidScopes
from ivcap_api.infrastructure.logging.logger import get_json_logger

__all__ = ["Principal", "JWTAuthorizer", "PRINCIPAL_KEY"]

PRINCIPAL_KEY = "principal"

log = get_json_logger(__name__)


class Principal(BaseModel):
    """Authenticated principal extracted from a verified JWT.

    Attributes:
        sub: Subject claim (user identifier).
        scopes: Normalized scopes as a tuple.
        claims: Full claims mapping for downstream uses/auditing.
    """

    model_config = ConfigDict(frozen=True)

    sub: str = ""
    scopes: tuple[str, ...] = ()
    claims: Mapping[str, Any] = Field(default_factory=dict)


def _strip_scheme(token: str) -> str:
    """Return the raw JWT, dropping a leading ``Bearer`` scheme if present."""
    raw = (token or "").strip()
    scheme, _, rest = raw.partition(" ")
    if rest and scheme.lower() == "bearer":
        return rest.strip()
    return raw


def _decode_hs256(token: str, cfg: AuthSettings) -> Mapping[str, Any]:
    """Decode and verify a JWT signed with HS256.

    Raises:
        DomainError: If no secret is configured.
        InvalidCredentials: If the token does not verify.
    """
    if cfg.hs256_secret is None or not cfg.hs256_secret.get_secret_value():
        raise DomainError("Auth misconfigured (missing HS256 secret)")
    try:
        return jwt.decode(
            token,
            cfg.hs256_secret.get_secret_value(),
            algorithms=["HS256"],
            options={"verify_aud": False},
        )
    except jwt.PyJWTError as exc:
        raise InvalidCredentials() from exc


def _scopes_from_claims(claims: Mapping[str, Any]) -> set[str]:
    raw = claims.get("scopes", claims.get("scope", ""))
    if isinstance(raw, str):
        return {s for s in raw.split() if s}
    if isinstance(raw, (list, tuple, set)):
        return {str(s) for s in raw if str(s)}
    return set()


class JWTAuthorizer:
    """Authorizer for :func:`ivcap_api.application.endpoints.authorize_then_call`."""

    def __init__(self, settings: AuthSettings | None = None) -> None:
        self._settings = settings

    async def __call__(
        self, ctx: CallContext, token: str, requirement: ScopeRequirement
    ) -> CallContext:
        cfg = self._settings or get_auth_settings()
        enriched: CallContext = dict(ctx)

        if not cfg.enabled:
            enriched[PRINCIPAL_KEY] = Principal(sub="dev-user")
            return enriched

        raw = _strip_scheme(token)
        if not raw:
            raise InvalidCredentials()
        claims = _decode_hs256(raw, cfg)
        scopes = _scopes_from_claims(claims)

        missing = [s for s in requirement.required_scopes if s not in scopes]
        if missing:
            log.info(
                "auth.scopes_missing",
                extra={"extra": {"sub": str(claims.get("sub", "")), "missing": missing}},
            )
            raise InvalidScopes(message=f"missing required scopes: {', '.join(missing)}")

        enriched[PRINCIPAL_KEY] = Principal(
            sub=str(claims.get("sub", "")), scopes=tuple(sorted(scopes)), claims=claims
        )
        return enriched
