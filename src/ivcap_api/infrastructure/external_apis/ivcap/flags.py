# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
Command-Line Flag Parsing

Purpose:
    Shared helpers for the per-resource payload builders: integer, boolean
    and JSON-body flags, with the error messages the CLI prints.

Notes:
    - Parse failures raise :class:`PayloadBuildError` immediately.
    - Format and range problems are collected by the builders and raised
      together as one :class:`ValidationError`.
"""
from __future__ import annotations

import json
import re
from typing import Final, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ivcap_api.domain.exceptions.validation import PayloadBuildError
from ivcap_api.domain.validation import Violations, check_range

__all__ = ["DEFAULT_LIMIT", "optional", "parse_int", "parse_bool", "parse_body", "parse_limit"]

M = TypeVar("M", bound=BaseModel)

DEFAULT_LIMIT: Final[int] = 10

_INT_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_TRUE: Final[frozenset[str]] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE: Final[frozenset[str]] = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def optional(value: str | None) -> str | None:
    """Empty flag values mean "not provided"."""
    return value if value else None


def parse_int(value: str, name: str, kind: str = "INT") -> int:
    if not _INT_RE.fullmatch(value):
        raise PayloadBuildError(f"invalid value for {name}, must be {kind}")
    return int(value)


def parse_limit(raw: str, errs: Violations) -> int:
    """Parse a page-size flag; the range 1..50 is checked into ``errs``."""
    if not raw:
        return DEFAULT_LIMIT
    limit = parse_int(raw, "limit")
    errs.add(check_range("limit", limit, minimum=1, maximum=50))
    return limit


def parse_bool(value: str, name: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise PayloadBuildError(f"invalid value for {name}, must be BOOL")


def parse_body(raw: str, model: type[M], example: str) -> M:
    """Decode a JSON body flag into ``model``.

    Raises:
        PayloadBuildError: If ``raw`` is not JSON of the expected shape. The
            message carries an example of a valid body.
    """
    try:
        return model.model_validate(json.loads(raw))
    except (ValueError, PydanticValidationError) as exc:
        raise PayloadBuildError(
            f"invalid JSON for body, error: {exc}, example of valid JSON: {example}"
        ) from exc
