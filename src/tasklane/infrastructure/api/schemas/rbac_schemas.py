"""RBAC API schemas for response validation."""

from pydantic import BaseModel, Field

from tasklane.domain.entities import Permission, Role


class MeResponse(BaseModel):
    """Authorization profile of the calling user.

    Attributes:
        user_id: Authenticated user id.
        email: Email claim from the access token.
        roles: Names of the roles held, sorted.
        permissions: Effective permission names, sorted.
    """

    user_id: str
    email: str
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)


class PermissionResponse(BaseModel):
    """Response schema for a permission."""

    name: str
    resource: str
    action: str
    description: str | None = None

    @classmethod
    def from_entity(cls, permission: Permission) -> "PermissionResponse":
        return cls(
            name=permission.name,
            resource=permission.resource,
            action=permission.action,
            description=permission.description,
        )


class PermissionListResponse(BaseModel):
    """Response schema for listing permissions."""

    items: list[PermissionResponse]
    total: int


class RoleResponse(BaseModel):
    """Response schema for a role.

    Attributes:
        name: Role name.
        level: Hierarchy level; higher outranks lower.
        description: Role description.
        permissions: Permission names granted by the role, sorted.
    """

    name: str
    level: int
    description: str | None = None
    permissions: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, role: Role) -> "RoleResponse":
        return cls(
            name=role.name,
            level=role.level,
            description=role.description,
            permissions=sorted(role.permissions),
        )


class RoleListResponse(BaseModel):
    """Response schema for listing roles."""

    items: list[RoleResponse]
    total: int


class RoleAssignmentResponse(BaseModel):
    """Result of assigning or removing a role."""

    user_id: str
    role_name: str
    roles: list[str]
