# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Queue resource: HTTP client, wire schemas and CLI payload builders."""

from __future__ import annotations

from ivcap_api.infrastructure.external_apis.ivcap.queue.client import QueueClient

__all__ = ["QueueClient"]
