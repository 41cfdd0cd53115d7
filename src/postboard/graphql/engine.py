"""
Query engine: executes one operation request against the schema.

Field-level execution is delegated to Strawberry / graphql-core, which
resolves sibling query fields concurrently and mutation root fields one after
another. The engine owns the request lifecycle and the response envelope. The
HTTP router asks it for each request's execution context and hands every
result back to it to be shaped into the envelope.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from strawberry import Schema
from strawberry.types import ExecutionResult

from ..logging import get_logger
from .context import make_execution_context
from .schema import schema as default_schema

if TYPE_CHECKING:
    from ..auth.context import RequestContext
    from ..database.store import DocumentStore

logger = get_logger(__name__)


class ExecutionState(Enum):
    RECEIVED = "received"
    CONTEXT_BUILT = "context_built"
    EXECUTING = "executing"
    SUCCESS = "success"
    PARTIAL = "partial"
    FATAL = "fatal"


@dataclass(frozen=True)
class OperationRequest:
    """An inbound operation: a query document plus its variables."""

    query: str
    variables: dict[str, Any] = field(default_factory=dict)
    operation_name: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> OperationRequest:
        """Parse a decoded JSON body.

        Raises:
            ValueError: If the body is not a well-formed operation request
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Request body must be a JSON object")

        query = payload.get("query")
        if not isinstance(query, str) or not query.strip():
            raise ValueError("Request body must contain a 'query' string")

        variables = payload.get("variables")
        if variables is None:
            variables = {}
        elif not isinstance(variables, Mapping):
            raise ValueError("'variables' must be a JSON object")

        operation_name = payload.get("operationName")
        if operation_name is not None and not isinstance(operation_name, str):
            raise ValueError("'operationName' must be a string")

        return cls(query=query, variables=dict(variables), operation_name=operation_name)


@dataclass(frozen=True)
class ErrorEntry:
    message: str
    path: list[str | int] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "path": self.path}


@dataclass
class OperationResponse:
    """Partial-result envelope: data and per-field errors side by side."""

    data: dict[str, Any] | None
    errors: list[ErrorEntry] = field(default_factory=list)
    state: ExecutionState = ExecutionState.SUCCESS

    @classmethod
    def from_result(cls, result: ExecutionResult) -> OperationResponse:
        errors = [
            ErrorEntry(message=error.message, path=list(error.path) if error.path else None)
            for error in result.errors or []
        ]

        if result.data is None and errors:
            state = ExecutionState.FATAL
        elif errors:
            state = ExecutionState.PARTIAL
        else:
            state = ExecutionState.SUCCESS

        return cls(data=result.data, errors=errors, state=state)

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "errors": [error.to_dict() for error in self.errors]}


class QueryEngine:
    """Runs operation requests with a per-request context and the shared store."""

    def __init__(self, store: DocumentStore, schema: Schema | None = None):
        self.store = store
        self.schema = schema or default_schema

    def context_value(self, context: RequestContext, request: Any = None) -> dict[str, Any]:
        """Build the execution context for one request."""
        logger.debug(
            "Execution context built",
            authenticated=context.is_authenticated,
            state=ExecutionState.CONTEXT_BUILT.value,
        )
        return make_execution_context(context, self.store, request)

    def complete(
        self, result: ExecutionResult, operation_name: str | None = None
    ) -> OperationResponse:
        """Fold an execution result into the response envelope."""
        response = OperationResponse.from_result(result)
        logger.debug(
            "Operation completed",
            operation_name=operation_name,
            state=response.state.value,
            error_count=len(response.errors),
        )
        return response

    async def execute(
        self,
        operation: OperationRequest,
        context: RequestContext,
        request: Any = None,
    ) -> OperationResponse:
        logger.debug(
            "Operation received",
            operation_name=operation.operation_name,
            state=ExecutionState.RECEIVED.value,
        )
        context_value = self.context_value(context, request)

        logger.debug("Executing operation", state=ExecutionState.EXECUTING.value)
        result = await self.schema.execute(
            operation.query,
            variable_values=operation.variables or None,
            context_value=context_value,
            operation_name=operation.operation_name,
        )
        return self.complete(result, operation.operation_name)
