"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLError, get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..config import settings
from ..logging import get_logger
from ..store import UserStoreError
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


class UserSchema(strawberry.Schema):
    """Schema that reports store rejections as expected outcomes.

    Errors raised by the user store (such as a duplicate id) still reach the
    client in ``errors``, but are logged at info instead of being handed to
    Strawberry's default error logger with a traceback.
    """

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: Any = None,
    ) -> None:
        unexpected = []
        for error in errors:
            if isinstance(error.original_error, UserStoreError):
                logger.info(
                    "User operation rejected",
                    error=error.message,
                    path=error.path,
                )
            else:
                unexpected.append(error)

        if unexpected:
            super().process_errors(unexpected, execution_context)


# Create the GraphQL schema
schema = UserSchema(
    query=Query,
    mutation=Mutation,
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Checks the schema structure and runs the introspection query so that
    unresolved type references fail at startup instead of at request time.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def export_schema() -> str:
    """Return the schema in GraphQL SDL."""
    return schema.as_str()


def create_graphql_router() -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI.

    The user store is not captured here; it is read from the application
    state on every request so each app instance serves its own store.
    """

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return {
            "request": request,
            "store": request.app.state.store,
        }

    return GraphQLRouter(
        schema,
        path=settings.graphql_path,
        graphql_ide=settings.graphql_ide,
        context_getter=get_context,
    )
