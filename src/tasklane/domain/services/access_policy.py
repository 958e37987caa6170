"""Access policy evaluation.

Combines the boolean predicates of ``AuthorizationService`` according to an
``AccessRequirement`` and returns an ``AccessDecision`` with a reason.
"""

from tasklane.core.logging import get_logger
from tasklane.domain.entities import AccessDecision, AccessRequirement
from tasklane.domain.services.authorization_service import AuthorizationService

logger = get_logger(__name__)


async def evaluate_access(
    service: AuthorizationService,
    user_id: str,
    requirement: AccessRequirement,
    resource_owner_id: str | None = None,
) -> AccessDecision:
    """Decide whether a user satisfies a requirement.

    Each configured check (ownership, roles, minimum role, permissions)
    yields a pass/fail. In "any" mode the first passing check allows; in
    "all" mode every configured check must pass. Ownership only counts when
    ``allow_owner`` is set and an owner id is known.

    Args:
        service: Authorization service bound to a session.
        user_id: Authenticated user id.
        requirement: Requirement configured for the guarded operation.
        resource_owner_id: Owner of the target resource, if any.

    Returns:
        The access decision.
    """
    if requirement.is_empty:
        return AccessDecision.deny("no requirements configured")

    any_mode = requirement.mode == "any"
    failures: list[str] = []

    if requirement.allow_owner:
        if resource_owner_id is not None and resource_owner_id == user_id:
            if any_mode:
                return AccessDecision.allow("resource owner")
        else:
            failures.append("not the resource owner")

    if requirement.roles:
        if await service.has_any_role(user_id, requirement.roles):
            if any_mode:
                return AccessDecision.allow("role matched")
        else:
            failures.append(f"missing role: one of {sorted(requirement.roles)}")

    if requirement.minimum_role is not None:
        if await service.has_minimum_role_level(user_id, requirement.minimum_role):
            if any_mode:
                return AccessDecision.allow(f"role level >= {requirement.minimum_role}")
        else:
            failures.append(f"role level below {requirement.minimum_role}")

    if requirement.permissions:
        if any_mode:
            granted = await service.has_any_permission(user_id, requirement.permissions)
        else:
            granted = await service.has_all_permissions(user_id, requirement.permissions)
        if granted:
            if any_mode:
                return AccessDecision.allow("permission matched")
        else:
            quantifier = "one of" if any_mode else "all of"
            failures.append(
                f"missing permission: {quantifier} {sorted(requirement.permissions)}"
            )

    if not any_mode and not failures:
        return AccessDecision.allow("all requirements met")

    decision = AccessDecision.deny("; ".join(failures))
    logger.debug(
        "Access denied",
        user_id=user_id,
        mode=requirement.mode,
        reason=decision.reason,
    )
    return decision
