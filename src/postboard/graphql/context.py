"""
Context handed to every resolver
"""

from dataclasses import dataclass
from typing import Any

import strawberry

from ..auth.context import ANONYMOUS, RequestContext
from ..database.store import DocumentStore


@dataclass(frozen=True)
class ResolverContext:
    """The caller's authorization context plus the shared store handle."""

    auth: RequestContext
    store: DocumentStore


def make_execution_context(
    auth: RequestContext, store: DocumentStore, request: Any = None
) -> dict[str, Any]:
    """Build the context value passed to schema execution."""
    return {"auth": auth, "store": store, "request": request}


def get_resolver_context(info: strawberry.Info) -> ResolverContext:
    """Extract the resolver context from a GraphQL info object."""
    context = info.context
    return ResolverContext(auth=context.get("auth") or ANONYMOUS, store=context["store"])
