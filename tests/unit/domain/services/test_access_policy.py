"""Unit tests for access policy composition."""

from unittest.mock import AsyncMock

import pytest

from tasklane.domain.entities import AccessRequirement
from tasklane.domain.services import AuthorizationService, evaluate_access


@pytest.fixture
def service():
    """Authorization service whose predicates all answer False by default."""
    mock = AsyncMock(spec=AuthorizationService)
    mock.has_any_role.return_value = False
    mock.has_minimum_role_level.return_value = False
    mock.has_any_permission.return_value = False
    mock.has_all_permissions.return_value = False
    return mock


@pytest.mark.asyncio
async def test_empty_requirement_denies(service):
    decision = await evaluate_access(service, "u1", AccessRequirement())

    assert decision.allowed is False
    assert decision.reason == "no requirements configured"


@pytest.mark.asyncio
async def test_any_mode_allows_on_first_passing_check(service):
    service.has_any_role.return_value = True
    requirement = AccessRequirement(roles=["admin"], permissions=["users:manage"])

    decision = await evaluate_access(service, "u1", requirement)

    assert decision.allowed is True
    assert decision.reason == "role matched"
    service.has_any_permission.assert_not_called()


@pytest.mark.asyncio
async def test_any_mode_falls_through_to_permissions(service):
    service.has_any_permission.return_value = True
    requirement = AccessRequirement(roles=["admin"], permissions=["users:manage"])

    decision = await evaluate_access(service, "u1", requirement)

    assert decision.allowed is True
    assert decision.reason == "permission matched"
    service.has_any_permission.assert_awaited_once_with("u1", frozenset({"users:manage"}))


@pytest.mark.asyncio
async def test_any_mode_denies_with_every_failure(service):
    requirement = AccessRequirement(
        roles=["admin"],
        permissions=["users:manage"],
        minimum_role="board_admin",
    )

    decision = await evaluate_access(service, "u1", requirement)

    assert decision.allowed is False
    assert "missing role: one of ['admin']" in decision.reason
    assert "role level below board_admin" in decision.reason
    assert "missing permission: one of ['users:manage']" in decision.reason


@pytest.mark.asyncio
async def test_owner_short_circuits_in_any_mode(service):
    requirement = AccessRequirement(permissions=["cards:update"], allow_owner=True)

    decision = await evaluate_access(service, "u1", requirement, resource_owner_id="u1")

    assert decision.allowed is True
    assert decision.reason == "resource owner"
    service.has_any_permission.assert_not_called()


@pytest.mark.asyncio
async def test_owner_is_ignored_unless_allowed(service):
    requirement = AccessRequirement(permissions=["cards:update"])

    decision = await evaluate_access(service, "u1", requirement, resource_owner_id="u1")

    assert decision.allowed is False


@pytest.mark.asyncio
async def test_unknown_owner_is_not_ownership(service):
    requirement = AccessRequirement(allow_owner=True)

    decision = await evaluate_access(service, "u1", requirement, resource_owner_id=None)

    assert decision.allowed is False
    assert decision.reason == "not the resource owner"


@pytest.mark.asyncio
async def test_all_mode_requires_every_check(service):
    service.has_any_role.return_value = True
    requirement = AccessRequirement(
        roles=["board_admin"],
        permissions=["cards:update", "cards:move"],
        mode="all",
    )

    decision = await evaluate_access(service, "u1", requirement)

    assert decision.allowed is False
    assert decision.reason == "missing permission: all of ['cards:move', 'cards:update']"
    service.has_all_permissions.assert_awaited_once()
    service.has_any_permission.assert_not_called()


@pytest.mark.asyncio
async def test_all_mode_allows_when_every_check_passes(service):
    service.has_any_role.return_value = True
    service.has_minimum_role_level.return_value = True
    service.has_all_permissions.return_value = True
    requirement = AccessRequirement(
        roles=["board_admin"],
        permissions=["cards:update"],
        minimum_role="board_member",
        allow_owner=True,
        mode="all",
    )

    decision = await evaluate_access(service, "u1", requirement, resource_owner_id="u1")

    assert decision.allowed is True
    assert decision.reason == "all requirements met"


@pytest.mark.asyncio
async def test_all_mode_owner_check_can_fail(service):
    service.has_all_permissions.return_value = True
    requirement = AccessRequirement(permissions=["cards:update"], allow_owner=True, mode="all")

    decision = await evaluate_access(service, "u1", requirement, resource_owner_id="u2")

    assert decision.allowed is False
    assert decision.reason == "not the resource owner"


@pytest.mark.asyncio
async def test_against_seeded_roles(seeded_session, make_user):
    service = AuthorizationService(seeded_session)
    member = await make_user("board_member")
    guest = await make_user("guest")
    requirement = AccessRequirement(permissions=["cards:update"], minimum_role="board_member")

    assert (await evaluate_access(service, member.id, requirement)).allowed is True
    assert (await evaluate_access(service, guest.id, requirement)).allowed is False
