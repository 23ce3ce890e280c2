"""
Root GraphQL query definitions
"""

import strawberry

from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(name="getUser")
    async def get_user(
        self,
        info: strawberry.Info,
        id: strawberry.ID | None = None,
        username: str | None = None,
    ) -> User | None:
        """Get a user by id or username."""
        from ..resolvers.user import resolve_get_user

        return await resolve_get_user(info, id, username)
