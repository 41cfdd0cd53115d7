"""Per-request authorization context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.requests import Request

    from .adapters.base import Principal


@dataclass(frozen=True)
class RequestContext:
    """Caller identity for a single request. Never mutated after construction."""

    user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = RequestContext()


def build_request_context(identity: Principal | None) -> RequestContext:
    """
    Project an already-resolved identity into a request context.

    Performs no I/O and never fails: a missing identity yields an anonymous
    context.
    """
    if not identity or not identity.get("subject"):
        return ANONYMOUS
    return RequestContext(user_id=identity["subject"])


def context_from_request(request: Request) -> RequestContext:
    """Build the context from the identity the identity middleware attached."""
    return build_request_context(getattr(request.state, "identity", None))
