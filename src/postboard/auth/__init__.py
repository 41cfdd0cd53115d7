"""Identity resolution and authorization context for Postboard."""

from .adapters.base import AuthAdapter, AuthenticationError, Principal
from .context import ANONYMOUS, RequestContext, build_request_context, context_from_request
from .factory import get_auth_adapter
from .middleware import IdentityMiddleware, resolve_identity

__all__ = [
    "ANONYMOUS",
    "AuthAdapter",
    "AuthenticationError",
    "IdentityMiddleware",
    "Principal",
    "RequestContext",
    "build_request_context",
    "context_from_request",
    "get_auth_adapter",
    "resolve_identity",
]
