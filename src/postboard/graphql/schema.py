"""
Main GraphQL schema definition using Strawberry
"""

from graphql import GraphQLError
from graphql import validate_schema as gql_validate_schema
from strawberry import Schema
from strawberry.types import ExecutionContext

from ..errors import FieldError, InvalidIdentifier, Unauthenticated
from ..logging import get_logger
from .mutations.root import Mutation
from .queries.root import Query
from .resolvers import validate_resolver_table

logger = get_logger(__name__)

# Rejections that are part of normal operation rather than faults
_EXPECTED_REJECTIONS = (InvalidIdentifier, Unauthenticated)


class PostboardSchema(Schema):
    """Strawberry schema that reports field errors through structlog."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        for error in errors:
            original = error.original_error
            if isinstance(original, _EXPECTED_REJECTIONS):
                logger.info("Field rejected", path=error.path, error=error.message)
            elif isinstance(original, FieldError):
                logger.warning("Field failed", path=error.path, error=error.message)
            else:
                logger.error(
                    "GraphQL execution error",
                    path=error.path,
                    error=error.message,
                    exc_info=original,
                )


schema = PostboardSchema(query=Query, mutation=Mutation)


def validate_schema() -> None:
    """Validate the GraphQL schema and the resolver table at startup.

    Raises:
        Exception: If the schema is invalid or a field has no resolver
    """
    try:
        validate_resolver_table()

        graphql_schema = schema._schema
        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise
