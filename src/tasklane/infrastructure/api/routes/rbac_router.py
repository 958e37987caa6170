"""RBAC API routes.

Exposes the caller's authorization profile, the role and permission
catalogs, and role assignment for administrators.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tasklane.core.logging import get_logger
from tasklane.domain.services import PERMISSIONS, ROLES
from tasklane.infrastructure.api.dependencies import (
    AuthenticatedUser,
    Authorization,
    CurrentUser,
)
from tasklane.infrastructure.api.middleware import require_access
from tasklane.infrastructure.api.schemas import (
    MeResponse,
    PermissionListResponse,
    PermissionResponse,
    RoleAssignmentResponse,
    RoleListResponse,
    RoleResponse,
)

logger = get_logger(__name__)

router = APIRouter()

CatalogReader = Annotated[
    CurrentUser,
    Depends(
        require_access(
            permissions=[PERMISSIONS.MEMBERS_READ],
            minimum_role=ROLES.USER,
        )
    ),
]

RoleManager = Annotated[
    CurrentUser,
    Depends(
        require_access(
            roles=[ROLES.ADMIN],
            permissions=[PERMISSIONS.USERS_MANAGE],
        )
    ),
]


@router.get("/me", response_model=MeResponse)
async def get_my_access(
    current_user: AuthenticatedUser,
    service: Authorization,
) -> MeResponse:
    """Roles and effective permissions of the calling user."""
    roles = await service.roles_of(current_user.user_id)
    permissions = await service.effective_permissions(current_user.user_id)
    return MeResponse(
        user_id=current_user.user_id,
        email=current_user.email,
        roles=sorted(roles),
        permissions=sorted(permissions),
    )


@router.get(
    "/roles",
    response_model=RoleListResponse,
    responses={403: {"description": "Access denied"}},
)
async def list_roles(
    current_user: CatalogReader,
    service: Authorization,
) -> RoleListResponse:
    """List every role with its level and permissions, most privileged first."""
    items = [RoleResponse.from_entity(role) for role in await service.list_roles()]
    return RoleListResponse(items=items, total=len(items))


@router.get(
    "/permissions",
    response_model=PermissionListResponse,
    responses={403: {"description": "Access denied"}},
)
async def list_permissions(
    current_user: CatalogReader,
    service: Authorization,
) -> PermissionListResponse:
    """List every permission ordered by name."""
    items = [
        PermissionResponse.from_entity(permission)
        for permission in await service.list_permissions()
    ]
    return PermissionListResponse(items=items, total=len(items))


@router.post(
    "/users/{user_id}/roles/{role_name}",
    response_model=RoleAssignmentResponse,
    responses={
        403: {"description": "Access denied"},
        404: {"description": "User or role not found"},
    },
)
async def assign_role(
    user_id: str,
    role_name: str,
    current_user: RoleManager,
    service: Authorization,
) -> RoleAssignmentResponse:
    """Give a role to a user. Assigning a role already held succeeds."""
    if not await service.assign_role(user_id, role_name):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{user_id}' or role '{role_name}' not found",
        )

    logger.info(
        "Role assigned via API",
        user_id=user_id,
        role_name=role_name,
        assigned_by=current_user.user_id,
    )
    return RoleAssignmentResponse(
        user_id=user_id,
        role_name=role_name,
        roles=sorted(await service.roles_of(user_id)),
    )


@router.delete(
    "/users/{user_id}/roles/{role_name}",
    response_model=RoleAssignmentResponse,
    responses={
        403: {"description": "Access denied"},
        404: {"description": "Role not held by user"},
    },
)
async def remove_role(
    user_id: str,
    role_name: str,
    current_user: RoleManager,
    service: Authorization,
) -> RoleAssignmentResponse:
    """Take a role away from a user."""
    if not await service.remove_role(user_id, role_name):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{user_id}' does not hold role '{role_name}'",
        )

    logger.info(
        "Role removed via API",
        user_id=user_id,
        role_name=role_name,
        removed_by=current_user.user_id,
    )
    return RoleAssignmentResponse(
        user_id=user_id,
        role_name=role_name,
        roles=sorted(await service.roles_of(user_id)),
    )
