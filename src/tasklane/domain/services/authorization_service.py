"""Role-based authorization service.

Answers authorization questions about a user at request time by walking
the persisted user -> roles -> permissions graph. Every query reads from the
store; nothing is cached between calls.

"Not found" and "no privilege" are never errors: an unknown user, an unknown
role or a user without roles yields empty sets and ``False``. Storage errors
(``sqlalchemy.exc.SQLAlchemyError``) propagate to the caller unchanged.
"""

from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from tasklane.core.logging import get_logger
from tasklane.domain.entities import Permission, Role
from tasklane.domain.services.role_hierarchy import (
    UNKNOWN_ROLE_LEVEL,
    meets_minimum_level,
)
from tasklane.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
    UserRepository,
)

logger = get_logger(__name__)


class AuthorizationService:
    """Resolves roles, permissions and hierarchy levels for users.

    Permission sets are unions across all roles a user holds. Empty
    requirement sets follow a fixed policy: "any of nothing" is False,
    "all of nothing" is True.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: Database session used for every lookup.
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.role_repo = RoleRepository(session)
        self.permission_repo = PermissionRepository(session)

    # Permission queries

    async def effective_permissions(self, user_id: str) -> set[str]:
        """Union of the permission names of every role the user holds.

        Args:
            user_id: User identifier.

        Returns:
            Set of permission names; empty for unknown users or users
            without roles.
        """
        user = await self.user_repo.get_by_id_with_roles(user_id)
        if user is None:
            logger.debug("Effective permissions for unknown user", user_id=user_id)
            return set()

        permissions: set[str] = set()
        for role in user.roles:
            permissions |= role.permission_names
        return permissions

    async def has_permission(self, user_id: str, permission_name: str) -> bool:
        """Check whether the user holds a single permission."""
        return permission_name in await self.effective_permissions(user_id)

    async def has_any_permission(
        self, user_id: str, permission_names: Iterable[str]
    ) -> bool:
        """Check whether the user holds at least one of the permissions.

        An empty ``permission_names`` always denies.
        """
        requested = set(permission_names)
        if not requested:
            return False
        return not requested.isdisjoint(await self.effective_permissions(user_id))

    async def has_all_permissions(
        self, user_id: str, permission_names: Iterable[str]
    ) -> bool:
        """Check whether the user holds every one of the permissions.

        An empty ``permission_names`` is trivially satisfied.
        """
        requested = set(permission_names)
        if not requested:
            return True
        return requested <= await self.effective_permissions(user_id)

    # Role queries

    async def roles_of(self, user_id: str) -> set[str]:
        """Names of the roles the user holds (empty for unknown users)."""
        return set(await self.user_repo.get_role_names(user_id))

    async def has_role(self, user_id: str, role_name: str) -> bool:
        """Check whether the user holds a role."""
        return role_name in await self.roles_of(user_id)

    async def has_any_role(self, user_id: str, role_names: Iterable[str]) -> bool:
        """Check whether the user holds at least one of the roles.

        An empty ``role_names`` always denies.
        """
        requested = set(role_names)
        if not requested:
            return False
        return not requested.isdisjoint(await self.roles_of(user_id))

    # Hierarchy

    async def hierarchy_level_of(self, role_name: str) -> int:
        """Hierarchy level stored on a role, 0 if the role does not exist."""
        levels = await self.role_repo.get_levels([role_name])
        return levels.get(role_name, UNKNOWN_ROLE_LEVEL)

    async def has_minimum_role_level(self, user_id: str, minimum_role_name: str) -> bool:
        """Check whether any of the user's roles ranks at least ``minimum_role_name``.

        A user without roles never qualifies, whatever the threshold.
        """
        role_names = await self.roles_of(user_id)
        if not role_names:
            return False

        levels = await self.role_repo.get_levels(role_names | {minimum_role_name})
        minimum_level = levels.get(minimum_role_name, UNKNOWN_ROLE_LEVEL)
        return meets_minimum_level(
            [levels.get(name, UNKNOWN_ROLE_LEVEL) for name in role_names],
            minimum_level,
        )

    # Ownership

    async def can_access_resource(
        self,
        user_id: str,
        resource_owner_id: str | None,
        required_permissions: Iterable[str],
    ) -> bool:
        """Owner-or-permission access check.

        The owner of a resource is always allowed. Anyone else needs at
        least one of ``required_permissions``.
        """
        if resource_owner_id is not None and user_id == resource_owner_id:
            return True
        return await self.has_any_permission(user_id, required_permissions)

    # Administration

    async def assign_role(self, user_id: str, role_name: str) -> bool:
        """Give a role to a user.

        Idempotent: holding the role already counts as success.

        Returns:
            True if the user holds the role afterwards, False if the user or
            role does not exist.
        """
        user = await self.user_repo.get_by_id(user_id)
        role = await self.role_repo.get_by_name(role_name)
        if user is None or role is None:
            logger.info(
                "Role assignment skipped: user or role not found",
                user_id=user_id,
                role_name=role_name,
                user_found=user is not None,
                role_found=role is not None,
            )
            return False

        if await self.user_repo.has_role(user.id, role.id):
            return True

        await self.user_repo.add_role(user.id, role.id)
        await self.session.commit()
        logger.info("Role assigned", user_id=user_id, role_name=role_name)
        return True

    async def remove_role(self, user_id: str, role_name: str) -> bool:
        """Take a role away from a user.

        Returns:
            True if the role was held and removed, False otherwise.
        """
        role = await self.role_repo.get_by_name(role_name)
        if role is None:
            return False

        removed = await self.user_repo.remove_role(user_id, role.id)
        if not removed:
            return False

        await self.session.commit()
        logger.info("Role removed", user_id=user_id, role_name=role_name)
        return True

    # Catalog reads

    async def permissions_of_role(self, role_name: str) -> set[str]:
        """Permission names granted by a role, empty if the role is unknown."""
        role = await self.role_repo.get_by_name_with_permissions(role_name)
        if role is None:
            return set()
        return role.permission_names

    async def list_roles(self) -> list[Role]:
        """Every persisted role, most privileged first."""
        return [
            Role(
                name=role.name,
                level=role.level,
                description=role.description,
                permissions=frozenset(role.permission_names),
            )
            for role in await self.role_repo.list_all()
        ]

    async def list_permissions(self) -> list[Permission]:
        """Every persisted permission ordered by name."""
        return [
            Permission(name=permission.name, description=permission.description)
            for permission in await self.permission_repo.list_all()
        ]
