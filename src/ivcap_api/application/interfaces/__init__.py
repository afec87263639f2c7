# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Service contracts a backend implements (order, project, queue)."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

# Per-call context handed from the authorizer to the service method.
CallContext = MutableMapping[str, Any]

__all__ = ["CallContext"]
