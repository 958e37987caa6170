"""Seeding and teardown of the role/permission graph.

``seed`` is idempotent: permissions and roles are created when absent and
overwritten otherwise, so a role always ends up with exactly the declared
permission set. ``clean`` wipes users, roles and permissions and is meant
for development and test resets only.
"""

import uuid
from dataclasses import dataclass, field
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from tasklane.core.logging import get_logger
from tasklane.domain.entities import Permission, Role
from tasklane.domain.services.rbac_catalog import (
    PERMISSION_CATALOG,
    ROLE_CATALOG,
    SAMPLE_USERS,
    SampleUser,
)
from tasklane.infrastructure.auth.password_hasher import hash_password
from tasklane.infrastructure.persistence.models import (
    PermissionModel,
    RoleModel,
    UserModel,
)
from tasklane.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
    UserRepository,
)

logger = get_logger(__name__)


@dataclass
class SeedSummary:
    """Counts reported by a seeding run."""

    permissions_created: int = 0
    permissions_updated: int = 0
    roles_created: int = 0
    roles_updated: int = 0
    users_created: int = 0
    users_updated: int = 0
    role_permission_counts: dict[str, int] = field(default_factory=dict)

    @property
    def permission_count(self) -> int:
        return self.permissions_created + self.permissions_updated

    @property
    def role_count(self) -> int:
        return self.roles_created + self.roles_updated


@dataclass
class CleanSummary:
    """Counts reported by a teardown run."""

    users_deleted: int = 0
    roles_deleted: int = 0
    permissions_deleted: int = 0


class AuthorizationSeeder:
    """Populates or wipes the authorization graph.

    Catalogs default to the built-in task board catalog but can be
    replaced, which is how tests exercise re-seeding with a changed role.
    """

    def __init__(
        self,
        session: AsyncSession,
        permissions: Iterable[Permission] = PERMISSION_CATALOG,
        roles: Iterable[Role] = ROLE_CATALOG,
        sample_users: Iterable[SampleUser] = SAMPLE_USERS,
    ) -> None:
        self.session = session
        self.permissions = tuple(permissions)
        self.roles = tuple(roles)
        self.sample_users = tuple(sample_users)
        self.permission_repo = PermissionRepository(session)
        self.role_repo = RoleRepository(session)
        self.user_repo = UserRepository(session)

    async def seed(
        self,
        include_users: bool = True,
        sample_password: str | None = None,
    ) -> SeedSummary:
        """Upsert the permission and role catalogs, then the sample users.

        Args:
            include_users: Whether to create the sample users.
            sample_password: Password for every sample user, overriding the
                per-user defaults.

        Returns:
            Summary of what was created and updated.
        """
        summary = SeedSummary()
        logger.info(
            "Starting RBAC seeding",
            permissions=len(self.permissions),
            roles=len(self.roles),
        )

        try:
            permissions_by_name = await self._seed_permissions(summary)
            roles_by_name = await self._seed_roles(permissions_by_name, summary)
            if include_users:
                await self._seed_users(roles_by_name, summary, sample_password)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "RBAC seeding completed",
            permissions_created=summary.permissions_created,
            permissions_updated=summary.permissions_updated,
            roles_created=summary.roles_created,
            roles_updated=summary.roles_updated,
            users_created=summary.users_created,
            users_updated=summary.users_updated,
        )
        for role_name, count in summary.role_permission_counts.items():
            logger.info("Role permission count", role_name=role_name, permissions=count)
        return summary

    async def _seed_permissions(self, summary: SeedSummary) -> dict[str, PermissionModel]:
        seeded: dict[str, PermissionModel] = {}
        for permission in self.permissions:
            model = await self.permission_repo.get_by_name(permission.name)
            if model is None:
                model = await self.permission_repo.create(
                    PermissionModel(
                        id=str(uuid.uuid4()),
                        name=permission.name,
                        description=permission.description,
                    )
                )
                summary.permissions_created += 1
                logger.debug("Created permission", permission=permission.name)
            else:
                model.description = permission.description
                summary.permissions_updated += 1
            seeded[permission.name] = model
        await self.session.flush()
        return seeded

    async def _seed_roles(
        self,
        permissions_by_name: dict[str, PermissionModel],
        summary: SeedSummary,
    ) -> dict[str, RoleModel]:
        seeded: dict[str, RoleModel] = {}
        for role in self.roles:
            unknown = role.permissions - permissions_by_name.keys()
            if unknown:
                raise ValueError(
                    f"Role {role.name!r} references unknown permissions: {sorted(unknown)}"
                )
            granted = [permissions_by_name[name] for name in sorted(role.permissions)]

            model = await self.role_repo.get_by_name_with_permissions(role.name)
            if model is None:
                model = RoleModel(
                    id=str(uuid.uuid4()),
                    name=role.name,
                    description=role.description,
                    level=role.level,
                    permissions=granted,
                )
                await self.role_repo.create(model)
                summary.roles_created += 1
                logger.info(
                    "Created role", role_name=role.name, permissions=len(granted)
                )
            else:
                # Replace in place so permissions dropped from the definition disappear
                model.description = role.description
                model.level = role.level
                model.permissions = granted
                summary.roles_updated += 1
                logger.info(
                    "Updated role", role_name=role.name, permissions=len(granted)
                )
            summary.role_permission_counts[role.name] = len(granted)
            seeded[role.name] = model
        await self.session.flush()
        return seeded

    async def _seed_users(
        self,
        roles_by_name: dict[str, RoleModel],
        summary: SeedSummary,
        sample_password: str | None,
    ) -> None:
        for sample in self.sample_users:
            role = roles_by_name.get(sample.role_name)
            if role is None:
                logger.warning(
                    "Skipping sample user: role not found",
                    email=sample.email,
                    role_name=sample.role_name,
                )
                continue

            user = await self.user_repo.get_by_email_with_roles(sample.email)
            if user is None:
                user = UserModel(
                    id=str(uuid.uuid4()),
                    email=sample.email,
                    name=sample.name,
                    password_hash=hash_password(sample_password or sample.password),
                    bio=sample.bio,
                    is_active=sample.is_active,
                    roles=[role],
                )
                await self.user_repo.create(user)
                summary.users_created += 1
                logger.info("Created user", email=sample.email, role_name=sample.role_name)
            else:
                user.roles = [role]
                summary.users_updated += 1
                logger.info("Updated user", email=sample.email, role_name=sample.role_name)
        await self.session.flush()

    async def clean(self) -> CleanSummary:
        """Delete all users, roles and permissions.

        This is irreversible and removes every user, not only seeded ones.

        Returns:
            Summary of deleted rows.
        """
        logger.warning("Cleaning up RBAC data")
        try:
            summary = CleanSummary(
                users_deleted=await self.user_repo.delete_all(),
                roles_deleted=await self.role_repo.delete_all(),
                permissions_deleted=await self.permission_repo.delete_all(),
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        # Bulk deletes bypass the identity map
        self.session.expunge_all()
        logger.warning(
            "RBAC cleanup completed",
            users_deleted=summary.users_deleted,
            roles_deleted=summary.roles_deleted,
            permissions_deleted=summary.permissions_deleted,
        )
        return summary
