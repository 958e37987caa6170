"""Pytest configuration for all tests."""

import os

# Must be set before tasklane settings are first loaded
os.environ.setdefault("TASKLANE_ENVIRONMENT", "testing")
os.environ.setdefault("TASKLANE_SECRET_KEY", "test-secret-key-for-tasklane-tests-only-32b")
os.environ.setdefault("TASKLANE_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import uuid
from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tasklane.infrastructure.auth.jwt_service import jwt_service
from tasklane.infrastructure.persistence import models  # noqa: F401
from tasklane.infrastructure.persistence.database import (
    Base,
    _enable_sqlite_foreign_keys,
    get_db_session,
)
from tasklane.infrastructure.persistence.models import UserModel
from tasklane.infrastructure.persistence.rbac_seeder import AuthorizationSeeder
from tasklane.infrastructure.persistence.repositories import RoleRepository

UserFactory = Callable[..., Awaitable[UserModel]]


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database with foreign keys enforced.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_session(db_session: AsyncSession) -> AsyncSession:
    """Session over a database holding the full permission and role catalogs.

    Sample users are not created; use ``make_user`` instead.
    """
    await AuthorizationSeeder(db_session).seed(include_users=False)
    return db_session


@pytest_asyncio.fixture
async def make_user(db_session: AsyncSession) -> UserFactory:
    """Factory creating a user holding the given (already seeded) roles."""

    async def _make_user(*role_names: str, email: str | None = None) -> UserModel:
        role_repo = RoleRepository(db_session)
        roles = []
        for name in role_names:
            role = await role_repo.get_by_name(name)
            assert role is not None, f"role {name!r} is not seeded"
            roles.append(role)

        user_id = str(uuid.uuid4())
        user = UserModel(
            id=user_id,
            email=email or f"{user_id[:8]}@example.com",
            name="Test User",
            password_hash="hashed_secret",
            is_active=True,
            roles=roles,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers() -> Callable[[UserModel], dict[str, str]]:
    """Build an Authorization header carrying a fresh access token for a user."""

    def _auth_headers(user: UserModel) -> dict[str, str]:
        token = jwt_service.create_access_token(user_id=user.id, email=user.email)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from tasklane.infrastructure.api.app import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}
