"""Access-token handling for the Tasklane HTTP adapter.

Requests reach the authorization guard carrying a bearer token whose
``user_id`` claim names the user to evaluate. Tokens are HS256 signed with
``TASKLANE_SECRET_KEY`` and stamped with the ``tasklane`` issuer. Login is
handled elsewhere; ``create_access_token`` backs the ``tasklane token``
command and the test suite.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from tasklane.core.config import get_settings


class JWTError(Exception):
    """A bearer token could not be used to identify a user."""


class TokenExpiredError(JWTError):
    """The token's ``exp`` claim is in the past."""


class InvalidTokenError(JWTError):
    """The token is malformed, badly signed, foreign or not an access token."""


class JWTService:
    """Issues and checks Tasklane access tokens.

    The signing key is read from settings on every use unless one is passed
    in, so a test that swaps settings also swaps the key.
    """

    ALGORITHM = "HS256"
    ISSUER = "tasklane"
    TOKEN_TYPE = "access"

    def __init__(self, secret_key: str | None = None) -> None:
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        return self._secret_key or get_settings().secret_key

    def create_access_token(
        self,
        user_id: str,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign a token identifying ``user_id``.

        ``expires_delta`` defaults to ``TASKLANE_ACCESS_TOKEN_EXPIRE_MINUTES``.
        """
        lifetime = expires_delta or timedelta(
            minutes=get_settings().access_token_expire_minutes
        )
        issued_at = datetime.now(timezone.utc)
        claims = {
            "iss": self.ISSUER,
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + lifetime,
            "user_id": user_id,
            "email": email,
            "type": self.TOKEN_TYPE,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Verify signature, expiry and issuer, and return the claims."""
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Like ``decode_token`` but also rejects non-access tokens."""
        claims = self.decode_token(token)
        if claims.get("type") != self.TOKEN_TYPE:
            raise InvalidTokenError("Not an access token")
        return claims


jwt_service = JWTService()
