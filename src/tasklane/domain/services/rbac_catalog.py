"""Built-in permission and role catalog.

Declares every permission of the task board domain, the built-in roles with
their exact permission sets, and the sample users created by the seeder in
development environments.
"""

from dataclasses import dataclass
from typing import Iterable

from tasklane.domain.entities import Permission, Role
from tasklane.domain.services.role_hierarchy import hierarchy_level


class PERMISSIONS:
    """Commonly referenced permission names."""

    BOARDS_CREATE = "boards:create"
    BOARDS_READ = "boards:read"
    BOARDS_UPDATE = "boards:update"
    BOARDS_DELETE = "boards:delete"
    BOARDS_MANAGE = "boards:manage"

    LISTS_CREATE = "lists:create"
    LISTS_READ = "lists:read"
    LISTS_UPDATE = "lists:update"
    LISTS_DELETE = "lists:delete"
    LISTS_ARCHIVE = "lists:archive"

    CARDS_CREATE = "cards:create"
    CARDS_READ = "cards:read"
    CARDS_UPDATE = "cards:update"
    CARDS_DELETE = "cards:delete"
    CARDS_ASSIGN = "cards:assign"
    CARDS_MOVE = "cards:move"
    CARDS_ARCHIVE = "cards:archive"

    MEMBERS_INVITE = "members:invite"
    MEMBERS_REMOVE = "members:remove"
    MEMBERS_READ = "members:read"
    MEMBERS_MANAGE = "members:manage"

    SYSTEM_ADMIN = "system:admin"
    USERS_MANAGE = "users:manage"
    WORKSPACES_MANAGE = "workspaces:manage"


class ROLES:
    """Built-in role names."""

    ADMIN = "admin"
    WORKSPACE_ADMIN = "workspace_admin"
    BOARD_OWNER = "board_owner"
    BOARD_ADMIN = "board_admin"
    BOARD_MEMBER = "board_member"
    BOARD_OBSERVER = "board_observer"
    USER = "user"
    GUEST = "guest"


PERMISSION_CATALOG: tuple[Permission, ...] = (
    # Boards
    Permission("boards:create", "Create new boards"),
    Permission("boards:read", "View boards and their content"),
    Permission("boards:update", "Edit board details and settings"),
    Permission("boards:delete", "Delete boards"),
    Permission("boards:manage", "Full board management including member management"),
    # Lists
    Permission("lists:create", "Create new lists in boards"),
    Permission("lists:read", "View lists"),
    Permission("lists:update", "Edit list details and reorder lists"),
    Permission("lists:delete", "Delete lists"),
    Permission("lists:archive", "Archive/unarchive lists"),
    # Cards
    Permission("cards:create", "Create new cards"),
    Permission("cards:read", "View cards and their details"),
    Permission("cards:update", "Edit card content, due dates, labels"),
    Permission("cards:delete", "Delete cards"),
    Permission("cards:assign", "Assign/unassign members to cards"),
    Permission("cards:move", "Move cards between lists and boards"),
    Permission("cards:archive", "Archive/unarchive cards"),
    # Comments
    Permission("comments:create", "Add comments to cards"),
    Permission("comments:read", "View comments"),
    Permission("comments:update", "Edit own comments"),
    Permission("comments:delete", "Delete own comments"),
    Permission("comments:moderate", "Delete any comments"),
    # Members
    Permission("members:invite", "Invite new members to boards"),
    Permission("members:remove", "Remove members from boards"),
    Permission("members:read", "View board members"),
    Permission("members:manage", "Manage member roles and permissions"),
    # Labels
    Permission("labels:create", "Create new labels"),
    Permission("labels:read", "View labels"),
    Permission("labels:update", "Edit label names and colors"),
    Permission("labels:delete", "Delete labels"),
    # Checklists
    Permission("checklists:create", "Create checklists in cards"),
    Permission("checklists:read", "View checklists"),
    Permission("checklists:update", "Edit checklist items and mark as complete"),
    Permission("checklists:delete", "Delete checklists"),
    # Attachments
    Permission("attachments:create", "Upload attachments to cards"),
    Permission("attachments:read", "View and download attachments"),
    Permission("attachments:delete", "Delete attachments"),
    # Notifications
    Permission("notifications:read", "View notifications"),
    Permission("notifications:manage", "Manage notification settings"),
    # Workspaces
    Permission("workspaces:create", "Create new workspaces"),
    Permission("workspaces:read", "View workspace details"),
    Permission("workspaces:update", "Edit workspace settings"),
    Permission("workspaces:delete", "Delete workspaces"),
    Permission("workspaces:manage", "Full workspace administration"),
    # Users
    Permission("users:read", "View user profiles"),
    Permission("users:update", "Edit own profile"),
    Permission("users:manage", "Manage all users (admin only)"),
    Permission("users:delete", "Delete user accounts (admin only)"),
    # Reports
    Permission("reports:read", "View reports and analytics"),
    Permission("reports:export", "Export reports and data"),
    # System
    Permission("system:admin", "Full system administration access"),
    Permission("system:backup", "Perform system backups"),
    Permission("system:maintenance", "Perform system maintenance"),
)


def select_permissions(
    resources: Iterable[str] = (),
    names: Iterable[str] = (),
) -> frozenset[str]:
    """Select catalog permissions by whole resource or by exact name.

    Args:
        resources: Resources whose every action is included (e.g. 'cards').
        names: Individual permission names to include.

    Returns:
        The selected permission names.

    Raises:
        ValueError: If a name or resource does not exist in the catalog.
    """
    catalog = {permission.name: permission for permission in PERMISSION_CATALOG}
    selected: set[str] = set()

    for resource in resources:
        matched = {name for name, p in catalog.items() if p.resource == resource}
        if not matched:
            raise ValueError(f"Unknown permission resource: {resource}")
        selected |= matched

    for name in names:
        if name not in catalog:
            raise ValueError(f"Unknown permission: {name}")
        selected.add(name)

    return frozenset(selected)


_BOARD_CONTENT = (
    "boards",
    "lists",
    "cards",
    "comments",
    "members",
    "labels",
    "checklists",
    "attachments",
    "notifications",
)


def _role(name: str, description: str, permissions: frozenset[str]) -> Role:
    return Role(
        name=name,
        level=hierarchy_level(name),
        description=description,
        permissions=permissions,
    )


ROLE_CATALOG: tuple[Role, ...] = (
    _role(
        ROLES.ADMIN,
        "System Administrator - Full access to all features",
        select_permissions(
            resources=("system", "workspaces", "reports") + _BOARD_CONTENT,
            names=("users:manage", "users:delete"),
        ),
    ),
    _role(
        ROLES.WORKSPACE_ADMIN,
        "Workspace Administrator - Full access within workspace",
        select_permissions(
            resources=("workspaces",) + _BOARD_CONTENT,
            names=("reports:read", "users:read", "users:update"),
        ),
    ),
    _role(
        ROLES.BOARD_OWNER,
        "Board Owner - Full access to owned boards",
        select_permissions(
            resources=_BOARD_CONTENT,
            names=("users:read", "users:update"),
        ),
    ),
    _role(
        ROLES.BOARD_ADMIN,
        "Board Administrator - Manage board content and members",
        select_permissions(
            resources=(
                "lists",
                "cards",
                "comments",
                "labels",
                "checklists",
                "attachments",
                "notifications",
            ),
            names=(
                "boards:read",
                "boards:update",
                "members:invite",
                "members:remove",
                "members:read",
                "users:read",
                "users:update",
            ),
        ),
    ),
    _role(
        ROLES.BOARD_MEMBER,
        "Board Member - Create and edit content",
        select_permissions(
            resources=("cards", "checklists", "attachments", "notifications"),
            names=(
                "boards:read",
                "lists:read",
                "lists:create",
                "lists:update",
                "comments:create",
                "comments:read",
                "comments:update",
                "comments:delete",
                "members:read",
                "labels:read",
                "labels:create",
                "users:read",
                "users:update",
            ),
        ),
    ),
    _role(
        ROLES.BOARD_OBSERVER,
        "Board Observer - View only access",
        select_permissions(
            names=(
                "boards:read",
                "lists:read",
                "cards:read",
                "comments:read",
                "members:read",
                "labels:read",
                "checklists:read",
                "attachments:read",
                "notifications:read",
                "users:read",
                "users:update",
            ),
        ),
    ),
    _role(
        ROLES.USER,
        "Regular User - Basic user capabilities",
        select_permissions(
            names=(
                "boards:create",
                "boards:read",
                "workspaces:create",
                "workspaces:read",
                "users:read",
                "users:update",
                "notifications:read",
                "notifications:manage",
            ),
        ),
    ),
    _role(
        ROLES.GUEST,
        "Guest User - Limited access to specific boards",
        select_permissions(
            names=(
                "boards:read",
                "lists:read",
                "cards:read",
                "comments:read",
                "members:read",
                "labels:read",
                "checklists:read",
                "attachments:read",
                "users:read",
            ),
        ),
    ),
)


@dataclass(frozen=True)
class SampleUser:
    """Development user created by the seeder."""

    email: str
    name: str
    password: str
    bio: str
    role_name: str
    is_active: bool = True


SAMPLE_USERS: tuple[SampleUser, ...] = (
    SampleUser(
        email="admin@tasklane.dev",
        name="System Administrator",
        password="admin123",
        bio="System administrator with full access",
        role_name=ROLES.ADMIN,
    ),
    SampleUser(
        email="workspace.admin@tasklane.dev",
        name="Workspace Admin",
        password="workspace123",
        bio="Workspace administrator",
        role_name=ROLES.WORKSPACE_ADMIN,
    ),
    SampleUser(
        email="board.owner@tasklane.dev",
        name="Board Owner",
        password="board123",
        bio="Board owner and manager",
        role_name=ROLES.BOARD_OWNER,
    ),
    SampleUser(
        email="member@tasklane.dev",
        name="Team Member",
        password="member123",
        bio="Active team member",
        role_name=ROLES.BOARD_MEMBER,
    ),
    SampleUser(
        email="observer@tasklane.dev",
        name="Observer",
        password="observer123",
        bio="Read-only observer",
        role_name=ROLES.BOARD_OBSERVER,
    ),
    SampleUser(
        email="user@tasklane.dev",
        name="Regular User",
        password="user123",
        bio="Regular user account",
        role_name=ROLES.USER,
    ),
    SampleUser(
        email="guest@tasklane.dev",
        name="Guest User",
        password="guest123",
        bio="Guest with limited access",
        role_name=ROLES.GUEST,
    ),
)
