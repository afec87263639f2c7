# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""ivcap-api: typed async client and endpoint layer for the IVCAP order,
project and queue services."""

__version__ = "0.1.0"
