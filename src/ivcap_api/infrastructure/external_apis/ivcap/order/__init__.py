# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Order resource: HTTP client, wire schemas and CLI payload builders."""

from __future__ import annotations

from ivcap_api.infrastructure.external_apis.ivcap.order.client import OrderClient

__all__ = ["OrderClient"]
