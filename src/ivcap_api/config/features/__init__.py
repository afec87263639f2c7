# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Feature-scoped settings views."""

from __future__ import annotations
