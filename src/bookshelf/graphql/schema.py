"""
Main GraphQL schema definition using Strawberry
"""

import strawberry
from fastapi import Request
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..auth.middleware import resolve_auth_context
from ..config import settings
from ..logging import get_logger
from .context import BookshelfContext
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

# Built once at import; the Query and Mutation classes map each field to its resolver
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Runs graphql-core validation plus an introspection query so an
    unresolvable type makes the server fail fast instead of erroring per
    request.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


async def get_context(request: Request) -> BookshelfContext:
    """Build the resolver context: shared services plus the caller's identity."""
    services = request.app.state.services
    auth = resolve_auth_context(services.tokens, request.headers.get("authorization"))
    return BookshelfContext(services=services, auth=auth)


def create_graphql_router() -> GraphQLRouter[BookshelfContext, None]:
    """Create a GraphQL router for FastAPI."""
    return GraphQLRouter(
        schema,
        path=settings.graphql_path,
        graphql_ide="graphiql" if settings.graphiql else None,
        context_getter=get_context,
    )
