# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Service method payloads (order, project, queue)."""

from __future__ import annotations
