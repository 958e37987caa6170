"""FastAPI dependencies for authentication and authorization.

Provides dependencies for extracting and validating JWT tokens from requests
and for building an ``AuthorizationService`` bound to the request session.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tasklane.core.logging import get_logger
from tasklane.domain.services import AuthorizationService
from tasklane.infrastructure.auth import (
    InvalidTokenError,
    TokenExpiredError,
    jwt_service,
)
from tasklane.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """Represents the current authenticated user context.

    Extracted from a valid JWT access token. Roles are not carried in the
    token; they are resolved from the store on every authorization check.
    """

    user_id: str
    email: str


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current user from the Authorization header.

    Args:
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        CurrentUser: The authenticated user's context.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt_service.validate_access_token(parts[1])
        return CurrentUser(user_id=payload["user_id"], email=payload["email"])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except KeyError as e:
        logger.warning("Authentication failed: missing claim in token", missing_claim=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing claim: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Type alias for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]

DatabaseSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_authorization_service(session: DatabaseSession) -> AuthorizationService:
    """Build an authorization service bound to the request session."""
    return AuthorizationService(session)


Authorization = Annotated[AuthorizationService, Depends(get_authorization_service)]
