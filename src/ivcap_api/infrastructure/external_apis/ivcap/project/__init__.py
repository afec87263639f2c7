# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Project resource: HTTP client, wire schemas and CLI payload builders."""

from __future__ import annotations

from ivcap_api.infrastructure.external_apis.ivcap.project.client import ProjectClient

__all__ = ["ProjectClient"]
