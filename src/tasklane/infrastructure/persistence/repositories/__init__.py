"""Persistence repositories for database operations."""

from tasklane.infrastructure.persistence.repositories.permission_repository import (
    PermissionRepository,
)
from tasklane.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from tasklane.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "PermissionRepository",
    "RoleRepository",
    "UserRepository",
]
