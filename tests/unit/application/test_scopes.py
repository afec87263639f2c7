from __future__ import annotations

import pytest

from ivcap_api.application.endpoints import OrderEndpoints, ProjectEndpoints, QueueEndpoints
from ivcap_api.application.scopes import (
    READ_SCOPE,
    SCOPE_REQUIREMENTS,
    WRITE_SCOPE,
    requirement_for,
)


def test_every_method_shares_the_scope_superset() -> None:
    for req in SCOPE_REQUIREMENTS.values():
        assert req.scopes == (READ_SCOPE, WRITE_SCOPE)
        assert len(req.required_scopes) == 1


@pytest.mark.parametrize(
    ("service", "method", "scope"),
    [
        ("order", "list", READ_SCOPE),
        ("order", "create", WRITE_SCOPE),
        ("order", "logs", READ_SCOPE),
        ("order", "metadata", READ_SCOPE),
        ("project", "create_project", WRITE_SCOPE),
        ("project", "update_membership", READ_SCOPE),
        ("project", "remove_membership", READ_SCOPE),
        ("project", "set_default_project", WRITE_SCOPE),
        ("project", "default_project", READ_SCOPE),
        ("queue", "enqueue", WRITE_SCOPE),
        ("queue", "dequeue", READ_SCOPE),
    ],
)
def test_requirement_for(service: str, method: str, scope: str) -> None:
    assert requirement_for(service, method).required_scopes == (scope,)


def test_unknown_method_raises_key_error() -> None:
    with pytest.raises(KeyError):
        requirement_for("order", "cancel")


def test_table_covers_every_endpoint() -> None:
    expected = {
        (bundle.SERVICE, method)
        for bundle in (OrderEndpoints, ProjectEndpoints, QueueEndpoints)
        for method in bundle.METHODS
    }
    assert set(SCOPE_REQUIREMENTS) == expected


def test_table_is_read_only() -> None:
    table = SCOPE_REQUIREMENTS
    with pytest.raises(TypeError):
        table[("order", "list")] = table[("order", "read")]  # type: ignore[index]
