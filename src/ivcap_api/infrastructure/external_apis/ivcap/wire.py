# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Wire Schemas (shared)

Purpose:
    Pydantic base for request and response bodies, plus the bodies every
    resource shares: hypermedia links and error bodies.

Notes:
    - Response fields are all optional; presence and formats are checked
      afterwards by the view validation so every problem is reported at once.
    - Unknown response fields are ignored.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

__all__ = ["WireModel", "LinkBody", "ErrorBody"]


class WireModel(BaseModel):
    """Base class for every JSON body exchanged with the API."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready body using wire names, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def to_domain(self) -> dict[str, Any]:
        """Return the decoded body keyed by domain attribute names."""
        return self.model_dump()


class LinkBody(WireModel):
    rel: str | None = None
    type: str | None = None
    href: str | None = None


class ErrorBody(WireModel):
    """Union of every error body shape; which fields matter depends on the status."""

    id: str | None = None
    message: str | None = None
    name: str | None = None
    value: str | None = None
