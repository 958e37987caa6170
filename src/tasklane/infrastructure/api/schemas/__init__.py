"""API request and response schemas."""

from tasklane.infrastructure.api.schemas.rbac_schemas import (
    MeResponse,
    PermissionListResponse,
    PermissionResponse,
    RoleAssignmentResponse,
    RoleListResponse,
    RoleResponse,
)

__all__ = [
    "MeResponse",
    "PermissionListResponse",
    "PermissionResponse",
    "RoleAssignmentResponse",
    "RoleListResponse",
    "RoleResponse",
]
