"""Domain services for Tasklane authorization."""

from tasklane.domain.services.access_policy import evaluate_access
from tasklane.domain.services.authorization_service import AuthorizationService
from tasklane.domain.services.rbac_catalog import (
    PERMISSION_CATALOG,
    PERMISSIONS,
    ROLE_CATALOG,
    ROLES,
    SAMPLE_USERS,
    SampleUser,
    select_permissions,
)
from tasklane.domain.services.role_hierarchy import (
    ROLE_HIERARCHY,
    UNKNOWN_ROLE_LEVEL,
    hierarchy_level,
    meets_minimum_level,
)

__all__ = [
    "AuthorizationService",
    "PERMISSIONS",
    "PERMISSION_CATALOG",
    "ROLES",
    "ROLE_CATALOG",
    "ROLE_HIERARCHY",
    "SAMPLE_USERS",
    "SampleUser",
    "UNKNOWN_ROLE_LEVEL",
    "evaluate_access",
    "hierarchy_level",
    "meets_minimum_level",
    "select_permissions",
]
