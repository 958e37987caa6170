"""Role entity for authorization.

Roles are named bundles of permissions carrying a hierarchy level.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Role:
    """Role entity for user authorization.

    Attributes:
        name: Globally unique role name (e.g. 'admin', 'board_member').
        level: Hierarchy level, higher is more privileged.
        description: Optional description of the role's purpose.
        permissions: Names of the permissions the role grants.
    """

    name: str
    level: int = 0
    description: str | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate role data after initialization."""
        if not self.name:
            raise ValueError("Role name is required")
        if not isinstance(self.level, int):
            raise ValueError("Role level must be an integer")
