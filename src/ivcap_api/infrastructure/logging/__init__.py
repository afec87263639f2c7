# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Structured logging."""

from __future__ import annotations
