"""Request authorization guards."""

from tasklane.infrastructure.api.middleware.authorization import (
    OwnerResolver,
    require_access,
)

__all__ = ["OwnerResolver", "require_access"]
