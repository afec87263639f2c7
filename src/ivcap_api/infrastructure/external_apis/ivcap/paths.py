# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""URL paths of the order, project and queue endpoints.

Path parameters are percent-escaped; ``:`` and ``@`` are kept so URNs stay
readable.
"""

from __future__ import annotations

from typing import Final
from urllib.parse import quote

_SAFE: Final[str] = ":@"


def _seg(value: str) -> str:
    return quote(value, safe=_SAFE)


# ---------------------------------- order ---------------------------------- #


def orders_path() -> str:
    return "/1/orders"


def order_path(order_id: str) -> str:
    return f"/1/orders/{_seg(order_id)}"


def order_products_path(order_id: str) -> str:
    return f"/1/orders/{_seg(order_id)}/products"


def order_metadata_path(order_id: str) -> str:
    return f"/1/orders/{_seg(order_id)}/metadata"


def order_logs_path(order_id: str) -> str:
    return f"/1/orders/{_seg(order_id)}/logs"


def order_top_path(order_id: str) -> str:
    return f"/1/orders/{_seg(order_id)}/top"


# --------------------------------- project --------------------------------- #


def projects_path() -> str:
    return "/1/project"


def project_path(project_id: str) -> str:
    return f"/1/project/{_seg(project_id)}"


def project_members_path(urn: str) -> str:
    return f"/1/project/{_seg(urn)}/members"


def project_membership_path(project_urn: str, user_urn: str) -> str:
    return f"/1/project/{_seg(project_urn)}/memberships/{_seg(user_urn)}"


def default_project_path() -> str:
    return "/1/project/default"


def project_account_path(project_urn: str) -> str:
    return f"/1/project/{_seg(project_urn)}/account"


# ---------------------------------- queue ---------------------------------- #


def queues_path() -> str:
    return "/1/queues"


def queue_path(queue_id: str) -> str:
    return f"/1/queues/{_seg(queue_id)}"


def queue_messages_path(queue_id: str) -> str:
    return f"/1/queues/{_seg(queue_id)}/messages"
