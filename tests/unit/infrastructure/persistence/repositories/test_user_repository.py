"""Unit tests for UserRepository."""

import uuid

import pytest
import pytest_asyncio

from tasklane.infrastructure.persistence.models import RoleModel, UserModel
from tasklane.infrastructure.persistence.repositories import UserRepository


@pytest_asyncio.fixture
async def roles(db_session):
    guest = RoleModel(id=str(uuid.uuid4()), name="guest", level=5)
    member = RoleModel(id=str(uuid.uuid4()), name="board_member", level=30)
    db_session.add_all([guest, member])
    await db_session.commit()
    return {"guest": guest, "board_member": member}


@pytest_asyncio.fixture
async def user(db_session):
    model = UserModel(
        id=str(uuid.uuid4()),
        email="alice@example.com",
        name="Alice",
        password_hash="hashed_secret",
    )
    await UserRepository(db_session).create(model)
    await db_session.commit()
    return model


@pytest.mark.asyncio
async def test_get_by_id(db_session, user):
    repo = UserRepository(db_session)

    assert (await repo.get_by_id(user.id)).email == "alice@example.com"
    assert await repo.get_by_id(str(uuid.uuid4())) is None


@pytest.mark.asyncio
async def test_is_active_defaults_to_true(db_session, user):
    assert (await UserRepository(db_session).get_by_id(user.id)).is_active is True


@pytest.mark.asyncio
async def test_add_and_remove_role(db_session, user, roles):
    repo = UserRepository(db_session)

    await repo.add_role(user.id, roles["guest"].id)
    await repo.add_role(user.id, roles["board_member"].id)
    await db_session.commit()

    assert await repo.get_role_names(user.id) == ["board_member", "guest"]
    assert await repo.has_role(user.id, roles["guest"].id) is True

    assert await repo.remove_role(user.id, roles["guest"].id) is True
    assert await repo.remove_role(user.id, roles["guest"].id) is False
    await db_session.commit()

    assert await repo.get_role_names(user.id) == ["board_member"]
    assert await repo.has_role(user.id, roles["guest"].id) is False


@pytest.mark.asyncio
async def test_get_by_id_with_roles_sees_new_memberships(db_session, user, roles):
    repo = UserRepository(db_session)

    loaded = await repo.get_by_id_with_roles(user.id)
    assert loaded.role_names == set()

    await repo.add_role(user.id, roles["guest"].id)
    await db_session.commit()

    reloaded = await repo.get_by_id_with_roles(user.id)
    assert reloaded.role_names == {"guest"}


@pytest.mark.asyncio
async def test_get_by_email_with_roles(db_session, user, roles):
    repo = UserRepository(db_session)
    await repo.add_role(user.id, roles["board_member"].id)
    await db_session.commit()

    loaded = await repo.get_by_email_with_roles("alice@example.com")

    assert loaded.id == user.id
    assert [role.name for role in loaded.roles] == ["board_member"]
    assert await repo.get_by_email_with_roles("bob@example.com") is None


@pytest.mark.asyncio
async def test_get_role_names_unknown_user(db_session):
    assert await UserRepository(db_session).get_role_names(str(uuid.uuid4())) == []


@pytest.mark.asyncio
async def test_delete_all_removes_memberships(db_session, user, roles):
    repo = UserRepository(db_session)
    await repo.add_role(user.id, roles["guest"].id)
    await db_session.commit()

    assert await repo.delete_all() == 1
    await db_session.commit()

    assert await repo.get_role_names(user.id) == []
