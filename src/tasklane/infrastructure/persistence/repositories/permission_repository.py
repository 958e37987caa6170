"""Permission repository for database operations."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasklane.infrastructure.persistence.models import (
    PermissionModel,
    RolePermissionsModel,
)


class PermissionRepository:
    """Repository for permission database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, permission: PermissionModel) -> PermissionModel:
        """Create a new permission.

        Args:
            permission: Permission model to create.

        Returns:
            Created permission model.
        """
        self.session.add(permission)
        await self.session.flush()
        return permission

    async def get_by_name(self, name: str) -> PermissionModel | None:
        """Get a permission by name.

        Args:
            name: Permission name (e.g. 'boards:create').

        Returns:
            Permission model if found, None otherwise.
        """
        result = await self.session.execute(
            select(PermissionModel).where(PermissionModel.name == name)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[PermissionModel]:
        """List all permissions ordered by name."""
        result = await self.session.execute(
            select(PermissionModel).order_by(PermissionModel.name)
        )
        return list(result.scalars().all())

    async def delete_all(self) -> int:
        """Delete every permission and every role grant.

        Returns:
            Number of permissions deleted.
        """
        await self.session.execute(delete(RolePermissionsModel))
        result = await self.session.execute(delete(PermissionModel))
        return result.rowcount or 0
