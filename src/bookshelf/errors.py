"""
Errors surfaced to GraphQL callers.

Both kinds are GraphQLError subclasses so graphql-core keeps the message and
the ``extensions.code`` when it formats the response.
"""

from typing import Any

from graphql import GraphQLError


class BookshelfError(GraphQLError):
    """Base class for errors returned in the GraphQL ``errors`` array."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, extensions: dict[str, Any] | None = None):
        super().__init__(message, extensions={"code": self.code, **(extensions or {})})


class ValidationError(BookshelfError):
    """Missing or invalid input, including uniqueness violations."""

    code = "BAD_USER_INPUT"


class AuthenticationError(BookshelfError):
    """Invalid credentials or a missing authenticated user."""

    code = "UNAUTHENTICATED"


class TokenError(Exception):
    """Raised when a token cannot be verified."""

    pass
