"""Role repository for database operations."""

from typing import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tasklane.infrastructure.persistence.models import (
    RoleModel,
    RolePermissionsModel,
    UserRolesModel,
)


class RoleRepository:
    """Repository for role database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, role: RoleModel) -> RoleModel:
        """Create a new role."""
        self.session.add(role)
        await self.session.flush()
        return role

    async def get_by_name(self, name: str) -> RoleModel | None:
        """Get a role by name.

        Args:
            name: Role name (e.g., 'admin', 'board_member').

        Returns:
            Role model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RoleModel).where(RoleModel.name == name)
        )
        return result.scalar_one_or_none()

    async def get_by_name_with_permissions(self, name: str) -> RoleModel | None:
        """Get a role by name with its permissions loaded."""
        result = await self.session.execute(
            select(RoleModel)
            .where(RoleModel.name == name)
            .options(selectinload(RoleModel.permissions))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_levels(self, names: Iterable[str]) -> dict[str, int]:
        """Map each existing role name in ``names`` to its hierarchy level."""
        wanted = set(names)
        if not wanted:
            return {}
        result = await self.session.execute(
            select(RoleModel.name, RoleModel.level).where(RoleModel.name.in_(wanted))
        )
        return {name: level for name, level in result.all()}

    async def list_all(self) -> list[RoleModel]:
        """List all roles with permissions, most privileged first."""
        result = await self.session.execute(
            select(RoleModel)
            .options(selectinload(RoleModel.permissions))
            .order_by(RoleModel.level.desc(), RoleModel.name)
        )
        return list(result.scalars().all())

    async def delete_all(self) -> int:
        """Delete every role along with its grants and memberships.

        Returns:
            Number of roles deleted.
        """
        await self.session.execute(delete(UserRolesModel))
        await self.session.execute(delete(RolePermissionsModel))
        result = await self.session.execute(delete(RoleModel))
        return result.rowcount or 0
