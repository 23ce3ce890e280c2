"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from .tokens import Principal


@dataclass
class AuthContext:
    """Runtime authentication context for a request."""

    user: Principal | None
    token: str | None

    @property
    def is_authenticated(self) -> bool:
        """Check if the request is authenticated."""
        return self.user is not None

    @property
    def user_id(self) -> UUID | None:
        """The authenticated user's id, if any."""
        if self.user is None:
            return None
        return UUID(self.user["user_id"])


ANONYMOUS = AuthContext(user=None, token=None)
