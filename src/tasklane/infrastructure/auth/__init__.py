"""Authentication infrastructure components.

Password hashing for seeded users and access-token validation for the
HTTP adapter.
"""

from tasklane.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from tasklane.infrastructure.auth.password_hasher import hash_password

__all__ = [
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "TokenExpiredError",
    "hash_password",
    "jwt_service",
]
