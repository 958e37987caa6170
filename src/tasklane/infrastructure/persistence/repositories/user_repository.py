"""User repository for database operations."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tasklane.infrastructure.persistence.models import (
    RoleModel,
    UserModel,
    UserRolesModel,
)


class UserRepository:
    """Repository for user database operations.

    Role membership is written through the user_roles junction table so
    that concurrent changes never rewrite the whole collection.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id_with_roles(self, user_id: str) -> UserModel | None:
        """Get a user with roles and each role's permissions loaded.

        Always re-reads from the database, even if the user is already in
        the session's identity map.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .options(selectinload(UserModel.roles).selectinload(RoleModel.permissions))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email_with_roles(self, email: str) -> UserModel | None:
        """Get a user by email with roles loaded."""
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.email == email)
            .options(selectinload(UserModel.roles))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_role_names(self, user_id: str) -> list[str]:
        """Get the names of the roles a user holds (empty if unknown user)."""
        result = await self.session.execute(
            select(RoleModel.name)
            .join(UserRolesModel, UserRolesModel.role_id == RoleModel.id)
            .where(UserRolesModel.user_id == user_id)
            .order_by(RoleModel.name)
        )
        return list(result.scalars().all())

    async def has_role(self, user_id: str, role_id: str) -> bool:
        """Check whether a membership row exists."""
        result = await self.session.execute(
            select(UserRolesModel.role_id).where(
                UserRolesModel.user_id == user_id,
                UserRolesModel.role_id == role_id,
            )
        )
        return result.first() is not None

    async def add_role(self, user_id: str, role_id: str) -> None:
        """Insert a membership row."""
        self.session.add(UserRolesModel(user_id=user_id, role_id=role_id))
        await self.session.flush()

    async def remove_role(self, user_id: str, role_id: str) -> bool:
        """Delete a membership row.

        Returns:
            True if a row was deleted, False if the user did not hold the role.
        """
        result = await self.session.execute(
            delete(UserRolesModel).where(
                UserRolesModel.user_id == user_id,
                UserRolesModel.role_id == role_id,
            )
        )
        return (result.rowcount or 0) > 0

    async def delete_all(self) -> int:
        """Delete every user and every role membership.

        Returns:
            Number of users deleted.
        """
        await self.session.execute(delete(UserRolesModel))
        result = await self.session.execute(delete(UserModel))
        return result.rowcount or 0
