# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Endpoint authorizers."""

from __future__ import annotations

from .jwt_authorizer import JWTAuthorizer, Principal

__all__ = ["JWTAuthorizer", "Principal"]
