"""No-auth adapter for local development without an identity provider."""

from __future__ import annotations

import os

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class NoAuthAdapter:
    """
    No-auth adapter that accepts any session token for local development.

    Every non-empty token resolves to the configured default user. Requests
    without a token stay anonymous.
    WARNING: Only use this in development environments!
    """

    def __init__(self, default_user_id: str = "dev-user"):
        self.default_user_id = default_user_id

        environment = os.getenv("POSTBOARD_ENVIRONMENT", "").lower()
        if environment in ("production", "prod"):
            logger.error(
                "NoAuthAdapter detected in production environment! "
                "This is a security risk and should never be used in production.",
                environment=environment,
            )
            raise RuntimeError(
                "NoAuthAdapter cannot be used in production environments. "
                "Please configure a proper authentication provider."
            )

        logger.warning(
            "NoAuthAdapter is active - any session token is treated as authenticated! "
            "This should ONLY be used in development.",
            user_id=default_user_id,
        )

    async def verify_token(self, token: str) -> Principal:
        """Always returns the default principal for a non-empty token."""
        if not token:
            raise AuthenticationError("Token required (even in no-auth mode)")

        return Principal(
            provider="none",
            subject=self.default_user_id,
            email="dev@example.com",
            display_name="Development User",
            claims={
                "mode": "development",
                "token": token[:20] + "..." if len(token) > 20 else token,
            },
        )

    async def issue_token(self, user_id: str | None = None, claims: dict | None = None) -> str:
        """Issue a fake development token."""
        token_parts = [
            "dev-token",
            user_id or self.default_user_id,
            "no-auth-mode",
        ]

        if claims:
            token_parts.extend(f"{k}={v}" for k, v in claims.items())

        return "|".join(token_parts)
