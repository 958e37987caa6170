"""Authorization guards for route handlers.

``require_access`` turns an access requirement into a FastAPI dependency.
The guard fails closed: if the authorization store cannot be read, the
request is denied rather than allowed.
"""

from typing import Awaitable, Callable, Iterable

from fastapi import HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tasklane.core.logging import get_logger
from tasklane.domain.entities import AccessRequirement, CompositionMode
from tasklane.domain.services import evaluate_access
from tasklane.infrastructure.api.dependencies import (
    AuthenticatedUser,
    Authorization,
    CurrentUser,
)

logger = get_logger(__name__)

OwnerResolver = Callable[[Request, AsyncSession], Awaitable[str | None]]


def require_access(
    roles: Iterable[str] = (),
    permissions: Iterable[str] = (),
    minimum_role: str | None = None,
    allow_owner: bool = False,
    mode: CompositionMode = "any",
    owner_resolver: OwnerResolver | None = None,
) -> Callable[..., Awaitable[CurrentUser]]:
    """Build a dependency enforcing an access requirement.

    Args:
        roles: Accepted role names.
        permissions: Required permission names.
        minimum_role: Role whose hierarchy level the caller must reach.
        allow_owner: Let the owner of the target resource through.
        mode: "any" or "all" composition of the configured checks.
        owner_resolver: Async callable returning the owner id of the target
            resource; only consulted when ``allow_owner`` is set.

    Returns:
        A dependency returning the authenticated user when access is granted.

    Raises:
        ValueError: If ownership is allowed without a way to resolve owners.
    """
    if allow_owner and owner_resolver is None:
        raise ValueError("allow_owner requires an owner_resolver")

    requirement = AccessRequirement(
        roles=frozenset(roles),
        permissions=frozenset(permissions),
        minimum_role=minimum_role,
        allow_owner=allow_owner,
        mode=mode,
    )

    async def guard(
        request: Request,
        current_user: AuthenticatedUser,
        service: Authorization,
    ) -> CurrentUser:
        try:
            owner_id = None
            if requirement.allow_owner and owner_resolver is not None:
                owner_id = await owner_resolver(request, service.session)
            decision = await evaluate_access(
                service,
                current_user.user_id,
                requirement,
                resource_owner_id=owner_id,
            )
        except SQLAlchemyError as e:
            logger.error(
                "Authorization check failed, denying access",
                user_id=current_user.user_id,
                path=request.url.path,
                error=str(e),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Authorization check failed",
            )

        if not decision.allowed:
            logger.info(
                "Access denied",
                user_id=current_user.user_id,
                path=request.url.path,
                reason=decision.reason,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied: {decision.reason}",
            )

        logger.debug(
            "Access granted",
            user_id=current_user.user_id,
            path=request.url.path,
            reason=decision.reason,
        )
        return current_user

    return guard
