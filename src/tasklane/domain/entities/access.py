"""Access requirement and decision value objects.

An ``AccessRequirement`` describes what a guarded operation demands; an
``AccessDecision`` is the allow/deny outcome handed to the HTTP layer.
"""

from dataclasses import dataclass, field
from typing import Literal

CompositionMode = Literal["any", "all"]


@dataclass(frozen=True)
class AccessRequirement:
    """Requirement configured for a guarded operation.

    Attributes:
        roles: Role names; satisfied if the user holds any of them.
        permissions: Permission names; in "any" mode the user needs at least
            one of them, in "all" mode every one of them.
        minimum_role: Role name whose hierarchy level the user must reach.
        allow_owner: Whether the owner of the target resource is allowed
            regardless of roles and permissions.
        mode: "any" allows when one configured check passes (OR),
            "all" requires every configured check to pass (AND).
    """

    roles: frozenset[str] = field(default_factory=frozenset)
    permissions: frozenset[str] = field(default_factory=frozenset)
    minimum_role: str | None = None
    allow_owner: bool = False
    mode: CompositionMode = "any"

    def __post_init__(self) -> None:
        """Validate the requirement after initialization."""
        if self.mode not in ("any", "all"):
            raise ValueError(f"Unknown composition mode: {self.mode!r}")
        # Accept any iterable of names from callers
        object.__setattr__(self, "roles", frozenset(self.roles))
        object.__setattr__(self, "permissions", frozenset(self.permissions))

    @property
    def is_empty(self) -> bool:
        """True when no check is configured at all."""
        return (
            not self.roles
            and not self.permissions
            and self.minimum_role is None
            and not self.allow_owner
        )


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an authorization check.

    Attributes:
        allowed: Whether access is granted.
        reason: Short human-readable explanation.
    """

    allowed: bool
    reason: str

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls, reason: str) -> "AccessDecision":
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, reason: str) -> "AccessDecision":
        return cls(allowed=False, reason=reason)
