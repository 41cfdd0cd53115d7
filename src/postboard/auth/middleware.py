"""Identity resolution middleware for FastAPI."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..logging import bind_user_id, get_logger
from .adapters.base import AuthAdapter, AuthenticationError, Principal

logger = get_logger(__name__)

# Session key holding the caller's token once they have signed in
SESSION_TOKEN_KEY = "token"


def extract_token(authorization: str | None, session: Mapping[str, Any] | None) -> str | None:
    """
    Pick the session token for a request.

    An explicit Bearer header wins over the token stored in the session
    cookie. Malformed headers are ignored rather than rejected.
    """
    if authorization:
        if not authorization.startswith("Bearer "):
            logger.warning("Invalid authorization format received")
            return None
        return authorization[7:].strip() or None

    if session:
        return session.get(SESSION_TOKEN_KEY) or None
    return None


async def resolve_identity(adapter: AuthAdapter, token: str | None) -> Principal | None:
    """Verify a token, returning None for missing or rejected tokens."""
    if not token:
        return None

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed, continuing anonymously", error=str(e))
        return None

    logger.debug(
        "Identity resolved",
        provider=principal.get("provider"),
        subject=principal.get("subject"),
    )
    return principal


class IdentityMiddleware(BaseHTTPMiddleware):
    """
    Attach the caller's identity (or None) to `request.state.identity`.

    Must run inside the session middleware so the session cookie is decoded.
    """

    def __init__(self, app: ASGIApp, adapter: AuthAdapter):
        super().__init__(app)
        self.adapter = adapter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        token = extract_token(request.headers.get("authorization"), request.scope.get("session"))
        identity = await resolve_identity(self.adapter, token)

        request.state.identity = identity
        bind_user_id(identity["subject"] if identity else None)

        return await call_next(request)
