"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

from .book import Book

if TYPE_CHECKING:
    from ...dbmodels import Users


@strawberry.type
class User:
    """User type for GraphQL API. The password hash is never exposed."""

    id: strawberry.ID | None = strawberry.field(name="_id")
    username: str | None
    email: str | None
    saved_books: list[Book | None] | None

    @classmethod
    def from_model(cls, user: "Users") -> "User":
        return cls(
            id=strawberry.ID(str(user.id)),
            username=user.username,
            email=user.email,
            saved_books=[Book.from_document(doc) for doc in user.saved_books or []],
        )
