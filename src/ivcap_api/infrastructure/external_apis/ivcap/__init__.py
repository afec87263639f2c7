# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""IVCAP REST clients for the order, project and queue resources."""

from __future__ import annotations

from ivcap_api.infrastructure.external_apis.ivcap.order import OrderClient
from ivcap_api.infrastructure.external_apis.ivcap.project import ProjectClient
from ivcap_api.infrastructure.external_apis.ivcap.queue import QueueClient
from ivcap_api.infrastructure.external_apis.ivcap.settings import (
    IvcapSettings,
    get_ivcap_settings,
)
from ivcap_api.infrastructure.external_apis.ivcap.transport import IvcapHTTPClient

__all__ = [
    "IvcapHTTPClient",
    "IvcapSettings",
    "get_ivcap_settings",
    "OrderClient",
    "ProjectClient",
    "QueueClient",
]
