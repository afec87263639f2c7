# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Operational entry points (command line)."""
