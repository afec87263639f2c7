# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Infrastructure layer: HTTP transport, auth and logging."""

from __future__ import annotations
