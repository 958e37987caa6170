"""Unit tests for the Role entity."""

import pytest

from tasklane.domain.entities import Role


def test_role_defaults():
    role = Role(name="custom")

    assert role.level == 0
    assert role.permissions == frozenset()
    assert role.description is None


def test_role_requires_name():
    with pytest.raises(ValueError, match="required"):
        Role(name="")


def test_role_rejects_non_integer_level():
    with pytest.raises(ValueError, match="integer"):
        Role(name="admin", level="100")
