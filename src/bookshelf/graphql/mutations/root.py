"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.auth import AuthPayload
from ..types.user import User


# Input types for mutations
@strawberry.input
class CreateUserInput:
    """Input for registering a new user."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


@strawberry.input
class SaveBookInput:
    """Input for saving a book to the current user's list."""

    book_id: str | None = None
    title: str | None = None
    authors: list[str | None] | None = None
    description: str | None = None
    image: str | None = None
    link: str | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Account mutations
    @strawberry.mutation(name="createUser")
    async def create_user(
        self, info: strawberry.Info, input: CreateUserInput | None = None
    ) -> AuthPayload | None:
        """Register a user and return a token for it."""
        from ..resolvers.user import create_user

        return await create_user(info, input)

    @strawberry.mutation(name="loginUser")
    async def login_user(
        self,
        info: strawberry.Info,
        username_or_email: str | None = None,
        password: str | None = None,
    ) -> AuthPayload | None:
        """Exchange a username or email and password for a token."""
        from ..resolvers.user import login_user

        return await login_user(info, username_or_email, password)

    # Saved book mutations
    @strawberry.mutation(name="saveBook")
    async def save_book(
        self, info: strawberry.Info, input: SaveBookInput | None = None
    ) -> User | None:
        """Add a book to the current user's saved list."""
        from ..resolvers.book import save_book

        return await save_book(info, input)

    @strawberry.mutation(name="deleteBook")
    async def delete_book(
        self, info: strawberry.Info, book_id: str | None = None
    ) -> User | None:
        """Remove a book from the current user's saved list."""
        from ..resolvers.book import delete_book

        return await delete_book(info, book_id)
