# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Auth Feature Settings

Summary:
    Typed view of the authentication toggles used by the endpoint
    authorizer.

Behavior:
    * ``AUTH_ENABLED``: when false, the authorizer admits every call with a
      synthetic dev principal.
    * ``AUTH_HS256_SECRET``: shared secret used to verify HS256 tokens.

Notes:
    * Not cached, so tests can flip the environment between calls.
    * Secrets are never logged.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["AuthSettings", "get_auth_settings"]


class AuthSettings(BaseSettings):
    """Authentication configuration for the endpoint layer.

    Attributes:
        enabled:
            When true, every endpoint call must present a valid bearer token.
        hs256_secret:
            Shared secret for HS256 validation. Required when enabled.
    """

    enabled: bool = Field(default=True, description="Enforce bearer authentication.")
    hs256_secret: SecretStr | None = Field(
        default=None, description="Shared secret for HS256 token verification."
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="AUTH_",
        extra="ignore",
    )


def get_auth_settings() -> AuthSettings:
    """Return auth configuration read from the current environment."""
    return AuthSettings()
