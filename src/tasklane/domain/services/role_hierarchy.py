"""Fixed role hierarchy levels.

Higher levels are more privileged. Role names absent from the table rank at
level 0. The seeder stamps these levels onto the persisted roles, which are
the source the authorization service reads at request time.
"""

from typing import Final, Mapping

UNKNOWN_ROLE_LEVEL: Final = 0

ROLE_HIERARCHY: Final[Mapping[str, int]] = {
    "admin": 100,
    "workspace_admin": 80,
    "board_owner": 60,
    "board_admin": 50,
    "board_member": 30,
    "board_observer": 20,
    "user": 10,
    "guest": 5,
}


def hierarchy_level(role_name: str) -> int:
    """Return the hierarchy level of a role name.

    Args:
        role_name: Role name to look up.

    Returns:
        The configured level, or 0 for unknown names.
    """
    return ROLE_HIERARCHY.get(role_name, UNKNOWN_ROLE_LEVEL)


def meets_minimum_level(levels: list[int], minimum_level: int) -> bool:
    """Check whether any of the given levels reaches ``minimum_level``.

    An empty list never meets a threshold.
    """
    return any(level >= minimum_level for level in levels)
