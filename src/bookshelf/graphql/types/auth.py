"""
Authentication payload returned by createUser and loginUser
"""

import strawberry

from .user import User


@strawberry.type
class AuthPayload:
    """A signed token together with the user it was issued for."""

    token: str | None
    user: User | None
