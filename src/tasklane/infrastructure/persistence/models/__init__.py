"""SQLAlchemy models for the Tasklane authorization graph.

All models inherit from the Base class defined in database.py.
"""

from tasklane.infrastructure.persistence.models.permission import PermissionModel
from tasklane.infrastructure.persistence.models.role import RoleModel
from tasklane.infrastructure.persistence.models.role_permissions import (
    RolePermissionsModel,
)
from tasklane.infrastructure.persistence.models.user import UserModel
from tasklane.infrastructure.persistence.models.user_roles import UserRolesModel

__all__ = [
    "PermissionModel",
    "RoleModel",
    "RolePermissionsModel",
    "UserModel",
    "UserRolesModel",
]
