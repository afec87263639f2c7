# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Pydantic settings for the IVCAP HTTP clients."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["IvcapSettings", "get_ivcap_settings"]


class IvcapSettings(BaseSettings):
    """Configuration for the order, project and queue clients.

    Environment variables (with ``model_config.env_prefix``):

    * ``IVCAP_BASE_URL``
    * ``IVCAP_JWT`` (used when a payload carries no token)
    * ``IVCAP_TIMEOUT_S``
    * ``IVCAP_RESTORE_BODY``
    * ``IVCAP_USER_AGENT``
    """

    base_url: str = Field(
        "http://localhost:8080",
        description="Base URL of the API (scheme, host and optional prefix).",
    )
    jwt: SecretStr | None = Field(
        None,
        description="Default bearer token for calls whose payload has none.",
    )
    timeout_s: float = Field(
        30.0,
        gt=0,
        description="Per-request timeout in seconds for clients this package creates.",
    )
    restore_body: bool = Field(
        False,
        description="Keep decoded response bodies buffered on the response for re-reading.",
    )
    user_agent: str = Field(
        "ivcap-api-client/0.1",
        description="User-Agent header sent with every request.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="IVCAP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @property
    def default_token(self) -> str:
        """Return the configured token, or an empty string."""
        return self.jwt.get_secret_value() if self.jwt is not None else ""


@lru_cache(maxsize=1)
def get_ivcap_settings() -> IvcapSettings:
    """Return process-wide settings loaded from the environment (cached)."""
    return IvcapSettings()
