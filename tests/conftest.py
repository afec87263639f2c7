# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator

import pytest

from ivcap_api.infrastructure.external_apis.ivcap.settings import (
    IvcapSettings,
    get_ivcap_settings,
)

BASE_URL = "http://ivcap.test"

_IVCAP_ENV = (
    "IVCAP_BASE_URL",
    "IVCAP_JWT",
    "IVCAP_TIMEOUT_S",
    "IVCAP_RESTORE_BODY",
    "IVCAP_USER_AGENT",
)


@pytest.fixture(autouse=True)
def _ivcap_env_isolated(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop IVCAP_* variables and the cached settings around every test."""
    for key in _IVCAP_ENV:
        monkeypatch.delenv(key, raising=False)
    get_ivcap_settings.cache_clear()
    yield
    get_ivcap_settings.cache_clear()


@pytest.fixture
def ivcap_settings() -> IvcapSettings:
    return IvcapSettings(base_url=BASE_URL)
