"""Permission entity for role-based access control.

A permission is an atomic capability string namespaced as
``resource:action`` (e.g. ``boards:create``).
"""

from dataclasses import dataclass


def split_permission_name(name: str) -> tuple[str, str]:
    """Split a permission name into its resource and action parts.

    Args:
        name: Permission name such as ``cards:move``.

    Returns:
        Tuple of (resource, action).

    Raises:
        ValueError: If the name is not of the form ``resource:action``.
    """
    resource, sep, action = name.partition(":")
    if not sep or not resource or not action or ":" in action:
        raise ValueError(f"Permission name must be 'resource:action', got {name!r}")
    return resource, action


@dataclass(frozen=True)
class Permission:
    """Permission entity.

    Attributes:
        name: Globally unique permission name (``resource:action``).
        description: Human-readable description.
    """

    name: str
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate permission data after initialization."""
        if not self.name:
            raise ValueError("Permission name is required")
        split_permission_name(self.name)

    @property
    def resource(self) -> str:
        """Resource part of the permission name."""
        return split_permission_name(self.name)[0]

    @property
    def action(self) -> str:
        """Action part of the permission name."""
        return split_permission_name(self.name)[1]
