"""
Session endpoints: sign in with a token, inspect the session, sign out.
"""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ...auth.adapters.base import AuthAdapter
from ...auth.context import context_from_request
from ...auth.middleware import SESSION_TOKEN_KEY, resolve_identity
from ...logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


class SessionCreateRequest(BaseModel):
    token: str


class SessionResponse(BaseModel):
    authenticated: bool
    user_id: str | None = None


@router.post("/session", response_model=SessionResponse)
async def create_session(body: SessionCreateRequest, request: Request) -> SessionResponse:
    """Verify a token and keep it in the session cookie for later requests."""
    adapter: AuthAdapter = request.app.state.auth_adapter
    principal = await resolve_identity(adapter, body.token)
    if principal is None:
        raise HTTPException(status_code=401, detail="Invalid token")

    request.session[SESSION_TOKEN_KEY] = body.token
    logger.info("Session started", user_id=principal["subject"])
    return SessionResponse(authenticated=True, user_id=principal["subject"])


@router.get("/session", response_model=SessionResponse)
async def get_session(request: Request) -> SessionResponse:
    """Report the identity attached to the current request."""
    context = context_from_request(request)
    return SessionResponse(authenticated=context.is_authenticated, user_id=context.user_id)


@router.delete("/session", response_model=SessionResponse)
async def delete_session(request: Request) -> SessionResponse:
    """Forget the session token."""
    request.session.pop(SESSION_TOKEN_KEY, None)
    logger.info("Session cleared")
    return SessionResponse(authenticated=False)
