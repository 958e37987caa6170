"""Domain entities for Tasklane authorization."""

from tasklane.domain.entities.access import (
    AccessDecision,
    AccessRequirement,
    CompositionMode,
)
from tasklane.domain.entities.permission import Permission, split_permission_name
from tasklane.domain.entities.role import Role

__all__ = [
    "AccessDecision",
    "AccessRequirement",
    "CompositionMode",
    "Permission",
    "Role",
    "split_permission_name",
]
