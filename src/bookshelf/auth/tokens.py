"""JWT issuing and verification for self-issued access tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, NotRequired, TypedDict
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError

from ..errors import TokenError
from ..logging import get_logger

if TYPE_CHECKING:
    from ..config import Settings
    from ..dbmodels import Users

logger = get_logger(__name__)


class Principal(TypedDict):
    """Identity extracted from a verified token."""

    user_id: str
    username: NotRequired[str]
    email: NotRequired[str]
    claims: NotRequired[dict]


class TokenIssuer:
    """Signs and verifies time-bound tokens carrying a user's identity."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "bookshelf",
        audience: str = "bookshelf-api",
        expiry_minutes: int = 120,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.expiry_minutes = expiry_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenIssuer:
        return cls(
            secret_key=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expiry_minutes=settings.token_expiry_minutes,
        )

    def issue_token(self, user: Users) -> str:
        """Issue a signed token for a stored user."""
        now = datetime.now(UTC)

        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(minutes=self.expiry_minutes),
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Principal:
        """Verify a token and return the principal it encodes.

        Raises:
            TokenError: If the token is malformed, expired or not ours
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "verify_exp": True,
                    "verify_nbf": True,
                    "verify_iat": True,
                },
            )
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise TokenError("Invalid token") from e

        subject = payload.get("sub")
        if not subject:
            raise TokenError("Missing 'sub' claim in token")
        try:
            user_id = UUID(str(subject))
        except ValueError as e:
            raise TokenError("Token subject is not a user id") from e

        principal = Principal(user_id=str(user_id))
        if username := payload.get("username"):
            principal["username"] = username
        if email := payload.get("email"):
            principal["email"] = email
        principal["claims"] = payload

        return principal
