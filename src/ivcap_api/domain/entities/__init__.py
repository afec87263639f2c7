# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Domain entities package.

Purpose:
    Result records for the order, project and queue resources and the
    static view tables that describe them:

    * common: hypermedia link.
    * order: order status, listing, products and resource usage.
    * project: project status, listing, members and account.
    * queue: queue status, listing and messages.
"""

from __future__ import annotations
