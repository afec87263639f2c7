# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Viewed Result Types (Domain Layer).

Purpose:
    Render one logical result type in several named field subsets ("views"),
    for example the full ``default`` view and a minimal ``tiny`` view, while
    sharing a single decode and validation path.

Layer:
    domain

Design:
    Each result type is described once by a static :class:`ResultView`
    descriptor: its dataclass, a table mapping view name to field names, and
    per-field rules (wire name, which views require it, format, enum values
    and nested element type). Four generic functions work off that table:

    * :func:`project` copies the fields a view declares into a :class:`Viewed`.
    * :func:`from_mapping` builds a :class:`Viewed` from a decoded wire body.
    * :func:`validate` checks the declared view only and merges violations.
    * :func:`materialize` rebuilds the dataclass; fields outside the view stay
      at their zero value.

    Nested viewed values take the parent's view name when their type declares
    it, and ``default`` otherwise.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from ivcap_api.domain.exceptions.validation import ValidationError
from ivcap_api.domain.validation import (
    Format,
    Violations,
    check_enum,
    check_format,
    missing_field,
)

__all__ = [
    "DEFAULT_VIEW",
    "FieldRule",
    "ResultView",
    "Viewed",
    "project",
    "from_mapping",
    "materialize",
    "validate",
    "validation_error",
]

DEFAULT_VIEW: Final[str] = "default"


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Static description of one result field.

    Attributes:
        name: Attribute name on the dataclass.
        wire: JSON name when it differs from ``name``.
        required: Views in which the field must be present.
        format: String format checked when the field is present.
        enum: Allowed values checked when the field is present.
        nested: Descriptor of the element type for object or list fields.
    """

    name: str
    wire: str | None = None
    required: tuple[str, ...] = ()
    format: Format | None = None
    enum: tuple[str, ...] = ()
    nested: ResultView | None = None

    @property
    def label(self) -> str:
        return self.wire or self.name


@dataclass(frozen=True, slots=True)
class ResultView:
    """Per-type view table plus field rules."""

    type_name: str
    result_cls: type[Any]
    views: Mapping[str, tuple[str, ...]]
    rules: tuple[FieldRule, ...]

    def rule(self, name: str) -> FieldRule:
        for r in self.rules:
            if r.name == name:
                return r
        raise KeyError(name)

    def fields_for(self, view: str) -> tuple[str, ...]:
        """Return the field names ``view`` declares, or raise for unknown views."""
        try:
            return self.views[view]
        except KeyError:
            violation = check_enum("view", view, tuple(self.views))
            raise ValidationError([violation] if violation else []) from None

    def nested_view(self, view: str) -> str:
        return view if view in self.views else DEFAULT_VIEW


@dataclass(slots=True)
class Viewed:
    """Projected representation of a result.

    Attributes:
        type: Descriptor of the projected result type.
        view: Name of the view that produced this projection.
        projected: Field values keyed by attribute name. Fields outside the
            view, or absent from the wire body, are ``None``.
    """

    type: ResultView
    view: str = DEFAULT_VIEW
    projected: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        return self.projected.get(name)


def _project_value(rule: FieldRule, value: Any, view: str, *, source: str) -> Any:
    if value is None or rule.nested is None:
        return value
    nested = rule.nested
    nested_view = nested.nested_view(view)
    convert = project if source == "value" else from_mapping
    if isinstance(value, list | tuple):
        return [convert(nested, item, nested_view) for item in value]  # type: ignore[operator]
    return convert(nested, value, nested_view)  # type: ignore[operator]


def project(descriptor: ResultView, value: Any, view: str = DEFAULT_VIEW) -> Viewed:
    """Project a domain value into ``view``.

    Args:
        descriptor: View table of the value's type.
        value: Dataclass instance of ``descriptor.result_cls``.
        view: View name.

    Returns:
        Projection holding the fields ``view`` declares.

    Raises:
        ValidationError: If ``view`` is not declared by the type.
    """
    names = descriptor.fields_for(view)
    projected: dict[str, Any] = {}
    for name in names:
        rule = descriptor.rule(name)
        projected[name] = _project_value(rule, getattr(value, name), view, source="value")
    return Viewed(type=descriptor, view=view, projected=projected)


def from_mapping(
    descriptor: ResultView, data: Mapping[str, Any], view: str = DEFAULT_VIEW
) -> Viewed:
    """Build a projection from a decoded body keyed by attribute name."""
    names = descriptor.fields_for(view)
    projected: dict[str, Any] = {}
    for name in names:
        rule = descriptor.rule(name)
        projected[name] = _project_value(rule, data.get(name), view, source="mapping")
    return Viewed(type=descriptor, view=view, projected=projected)


def _materialize_value(value: Any) -> Any:
    if isinstance(value, Viewed):
        return materialize(value)
    if isinstance(value, list):
        return [_materialize_value(item) for item in value]
    return value


def materialize(viewed: Viewed) -> Any:
    """Rebuild the domain value from a projection.

    Fields the view did not populate keep the dataclass zero value; callers
    must not read meaning into them.
    """
    kwargs: dict[str, Any] = {}
    for name in viewed.type.fields_for(viewed.view):
        value = viewed.projected.get(name)
        if value is not None:
            kwargs[name] = _materialize_value(value)
    return viewed.type.result_cls(**kwargs)


def _collect(viewed: Viewed, root: str, out: Violations) -> None:
    descriptor = viewed.type
    for name in descriptor.fields_for(viewed.view):
        rule = descriptor.rule(name)
        value = viewed.projected.get(name)
        qualified = f"{root}.{rule.label}"
        if value is None:
            if viewed.view in rule.required:
                out.add(missing_field(rule.label, root))
            continue
        if rule.format is not None:
            out.add(check_format(qualified, value, rule.format))
        if rule.enum:
            out.add(check_enum(qualified, value, rule.enum))
        if rule.nested is not None:
            items: Iterable[Any] = value if isinstance(value, list) else [value]
            for idx, item in enumerate(items):
                path = f"{qualified}[{idx}]" if isinstance(value, list) else qualified
                if isinstance(item, Viewed):
                    _collect(item, path, out)


def validate(viewed: Viewed, root: str = "result") -> None:
    """Validate the fields of the declared view only.

    Args:
        viewed: Projection to check.
        root: Name used to qualify field names in messages.

    Raises:
        ValidationError: With every violation found, merged.
    """
    out = Violations()
    _collect(viewed, root, out)
    out.raise_if_any()


def validation_error(viewed: Viewed, root: str = "result") -> ValidationError | None:
    """Return the merged validation error instead of raising it."""
    out = Violations()
    _collect(viewed, root, out)
    return out.error()
