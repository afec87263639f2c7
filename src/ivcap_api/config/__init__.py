# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Configuration package."""

from __future__ import annotations
