"""
HTTP entry point for GraphQL operations
"""

from typing import Any

from fastapi import HTTPException, Request
from strawberry import Schema
from strawberry.fastapi import GraphQLRouter
from strawberry.http import GraphQLHTTPResponse
from strawberry.types import ExecutionResult

from ..auth.context import context_from_request
from ..logging import get_logger
from .engine import QueryEngine
from .schema import schema as default_schema

logger = get_logger(__name__)


def _query_engine(request: Request) -> QueryEngine:
    engine: QueryEngine | None = getattr(request.app.state, "query_engine", None)
    if engine is None:
        logger.error("GraphQL request received before the document store was attached")
        raise HTTPException(status_code=503, detail="Document store unavailable")
    return engine


class PostboardGraphQLRouter(GraphQLRouter[dict[str, Any], None]):
    """GraphQL router that answers with the `{data, errors}` envelope."""

    async def process_result(  # type: ignore[override]
        self, request: Request, result: ExecutionResult
    ) -> GraphQLHTTPResponse:
        response = _query_engine(request).complete(result)
        return response.to_dict()  # type: ignore[return-value]


def create_graphql_router(
    path: str = "/graphql",
    graphql_ide: bool = True,
    schema: Schema | None = None,
) -> PostboardGraphQLRouter:
    """Create the GraphQL router for FastAPI.

    Args:
        path: Route serving both POST operations and, when enabled, the IDE
        graphql_ide: Serve GraphiQL to browsers on GET
        schema: Schema to execute (defaults to the application schema)
    """

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return _query_engine(request).context_value(context_from_request(request), request)

    return PostboardGraphQLRouter(
        schema or default_schema,
        path=path,
        graphql_ide="graphiql" if graphql_ide else None,
        context_getter=get_context,
    )
