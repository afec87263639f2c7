# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Domain layer: result entities, views, validation and errors (no I/O)."""

from __future__ import annotations
