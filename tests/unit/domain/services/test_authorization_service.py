"""Unit tests for AuthorizationService."""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from tasklane.domain.services import ROLE_CATALOG, AuthorizationService
from tasklane.infrastructure.persistence.models import RoleModel, UserRolesModel


@pytest.fixture
def service(seeded_session):
    return AuthorizationService(seeded_session)


async def _membership_count(session, user_id: str) -> int:
    result = await session.execute(
        select(func.count()).select_from(UserRolesModel).where(UserRolesModel.user_id == user_id)
    )
    return result.scalar_one()


# Effective permissions


@pytest.mark.asyncio
async def test_effective_permissions_is_union_of_roles(service, make_user):
    user = await make_user("board_observer", "user")

    expected = await service.permissions_of_role("board_observer") | await service.permissions_of_role("user")

    assert await service.effective_permissions(user.id) == expected
    assert "notifications:manage" in expected
    assert "cards:read" in expected


@pytest.mark.asyncio
async def test_effective_permissions_unknown_user_is_empty(service):
    assert await service.effective_permissions(str(uuid.uuid4())) == set()


@pytest.mark.asyncio
async def test_user_without_roles(service, make_user):
    user = await make_user()

    assert await service.effective_permissions(user.id) == set()
    assert await service.roles_of(user.id) == set()
    assert await service.has_minimum_role_level(user.id, "guest") is False


@pytest.mark.asyncio
async def test_board_member_scenario(service, make_user):
    user = await make_user("board_member")

    assert await service.has_permission(user.id, "cards:create") is True
    assert await service.has_permission(user.id, "boards:delete") is False


@pytest.mark.asyncio
async def test_permissions_of_role_matches_catalog(service):
    definition = next(role for role in ROLE_CATALOG if role.name == "board_admin")

    assert await service.permissions_of_role("board_admin") == set(definition.permissions)
    assert await service.permissions_of_role("nonexistent") == set()


# Any / all


@pytest.mark.asyncio
async def test_empty_permission_sets(service, make_user):
    user = await make_user("admin")

    assert await service.has_any_permission(user.id, []) is False
    assert await service.has_all_permissions(user.id, []) is True


@pytest.mark.asyncio
async def test_has_any_permission(service, make_user):
    user = await make_user("guest")

    assert await service.has_any_permission(user.id, ["boards:delete", "cards:read"]) is True
    assert await service.has_any_permission(user.id, ["boards:delete", "cards:update"]) is False


@pytest.mark.asyncio
async def test_has_all_permissions(service, make_user):
    user = await make_user("guest")

    assert await service.has_all_permissions(user.id, ["boards:read", "cards:read"]) is True
    assert await service.has_all_permissions(user.id, ["boards:read", "cards:update"]) is False


@pytest.mark.asyncio
async def test_unknown_permission_is_never_held(service, make_user):
    user = await make_user("admin")

    assert await service.has_permission(user.id, "rockets:launch") is False


# Roles


@pytest.mark.asyncio
async def test_role_queries(service, make_user):
    user = await make_user("board_member", "guest")

    assert await service.roles_of(user.id) == {"board_member", "guest"}
    assert await service.has_role(user.id, "guest") is True
    assert await service.has_role(user.id, "admin") is False
    assert await service.has_any_role(user.id, ["admin", "guest"]) is True
    assert await service.has_any_role(user.id, ["admin", "board_owner"]) is False
    assert await service.has_any_role(user.id, []) is False


# Hierarchy


@pytest.mark.asyncio
async def test_hierarchy_level_of_reads_stored_level(service, seeded_session):
    assert await service.hierarchy_level_of("board_admin") == 50
    assert await service.hierarchy_level_of("unknown") == 0

    role = (
        await seeded_session.execute(select(RoleModel).where(RoleModel.name == "guest"))
    ).scalar_one()
    role.level = 7
    await seeded_session.commit()

    assert await service.hierarchy_level_of("guest") == 7


@pytest.mark.asyncio
async def test_minimum_role_level(service, make_user):
    board_admin = await make_user("board_admin")
    guest = await make_user("guest")
    mixed = await make_user("guest", "board_member")

    assert await service.has_minimum_role_level(board_admin.id, "board_member") is True
    assert await service.has_minimum_role_level(guest.id, "board_member") is False
    assert await service.has_minimum_role_level(mixed.id, "board_member") is True
    assert await service.has_minimum_role_level(guest.id, "guest") is True


@pytest.mark.asyncio
async def test_unknown_minimum_role_ranks_at_zero(service, make_user):
    guest = await make_user("guest")

    assert await service.has_minimum_role_level(guest.id, "nonexistent") is True


# Ownership


@pytest.mark.asyncio
async def test_owner_can_always_access(service, make_user):
    user = await make_user()

    assert await service.can_access_resource(user.id, user.id, ["system:admin"]) is True
    assert await service.can_access_resource(user.id, user.id, []) is True


@pytest.mark.asyncio
async def test_non_owner_falls_back_to_any_permission(service, make_user):
    user = await make_user("guest")
    other = str(uuid.uuid4())

    for required in (["cards:read"], ["cards:update"], [], ["cards:update", "labels:read"]):
        assert await service.can_access_resource(
            user.id, other, required
        ) == await service.has_any_permission(user.id, required)


@pytest.mark.asyncio
async def test_missing_owner_does_not_match(service, make_user):
    user = await make_user()

    assert await service.can_access_resource(user.id, None, ["cards:read"]) is False


# Assignment


@pytest.mark.asyncio
async def test_assign_role_is_idempotent(service, seeded_session, make_user):
    user = await make_user()

    assert await service.assign_role(user.id, "admin") is True
    assert await service.assign_role(user.id, "admin") is True

    assert await service.roles_of(user.id) == {"admin"}
    assert await _membership_count(seeded_session, user.id) == 1
    assert await service.has_permission(user.id, "system:admin") is True


@pytest.mark.asyncio
async def test_assign_role_unknown_user_or_role(service, make_user):
    user = await make_user()

    assert await service.assign_role(user.id, "nonexistent") is False
    assert await service.assign_role(str(uuid.uuid4()), "admin") is False
    assert await service.roles_of(user.id) == set()


@pytest.mark.asyncio
async def test_remove_role(service, make_user):
    user = await make_user("guest", "user")

    assert await service.remove_role(user.id, "guest") is True
    assert await service.roles_of(user.id) == {"user"}
    assert await service.has_permission(user.id, "cards:read") is False


@pytest.mark.asyncio
async def test_remove_role_not_held_leaves_roles_unchanged(service, make_user):
    user = await make_user("guest")

    assert await service.remove_role(user.id, "admin") is False
    assert await service.remove_role(user.id, "nonexistent") is False
    assert await service.remove_role(str(uuid.uuid4()), "guest") is False
    assert await service.roles_of(user.id) == {"guest"}


# Catalog reads


@pytest.mark.asyncio
async def test_list_roles_most_privileged_first(service):
    roles = await service.list_roles()

    assert [role.name for role in roles][:2] == ["admin", "workspace_admin"]
    assert roles[-1].name == "guest"
    assert "system:admin" in roles[0].permissions


@pytest.mark.asyncio
async def test_list_permissions(service):
    permissions = await service.list_permissions()

    names = [permission.name for permission in permissions]
    assert len(names) == 53
    assert names == sorted(names)


# Storage failures


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("operation", "args"),
    [
        ("effective_permissions", ("user-1",)),
        ("has_any_permission", ("user-1", ["cards:read"])),
        ("roles_of", ("user-1",)),
        ("has_minimum_role_level", ("user-1", "guest")),
        ("assign_role", ("user-1", "guest")),
        ("remove_role", ("user-1", "guest")),
    ],
)
async def test_storage_errors_propagate(mock_session, operation, args):
    mock_session.execute.side_effect = OperationalError(
        "SELECT 1", {}, Exception("database is locked")
    )
    service = AuthorizationService(mock_session)

    with pytest.raises(OperationalError):
        await getattr(service, operation)(*args)

    mock_session.commit.assert_not_called()
