# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Shared Entities

Purpose:
    Hypermedia link shared by every resource's list and status results.

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ivcap_api.domain.views import DEFAULT_VIEW, FieldRule, ResultView

_REQUIRED: Final[tuple[str, ...]] = (DEFAULT_VIEW,)


@dataclass(frozen=True, slots=True)
class Link:
    """Hypermedia link (pagination, related resources).

    Args:
        rel: Relation type, for example ``self`` or ``next``.
        type: Mime type of the target.
        href: Target URL.
    """

    rel: str = ""
    type: str = ""
    href: str = ""


LINK_VIEWS: Final[ResultView] = ResultView(
    type_name="LinkT",
    result_cls=Link,
    views={DEFAULT_VIEW: ("rel", "type", "href")},
    rules=(
        FieldRule("rel", required=_REQUIRED),
        FieldRule("type", required=_REQUIRED),
        FieldRule("href", required=_REQUIRED),
    ),
)
