# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Application layer: service contracts, payloads, scopes and endpoints."""

from __future__ import annotations
