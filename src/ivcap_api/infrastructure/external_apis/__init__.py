# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""External API clients."""

from __future__ import annotations
