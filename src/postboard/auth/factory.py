"""Factory for creating auth adapters based on configuration."""

from __future__ import annotations

from ..config import Settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter
from .adapters.none import NoAuthAdapter


def get_auth_adapter(config: Settings | None = None) -> AuthAdapter:
    """Create and return the configured auth adapter.

    Settings are re-read from the environment when none are passed, so the
    adapter always reflects the current POSTBOARD_AUTH_* variables.
    """
    config = config or Settings()
    provider = config.auth_provider
    options = config.auth_config or {}

    if provider == "none":
        return NoAuthAdapter(default_user_id=options.get("default_user_id", "dev-user"))

    elif provider == "jwt":
        secret_key = options.get("secret_key") or config.jwt_secret
        if not secret_key:
            raise ValueError(
                "JWT secret key is required. Set POSTBOARD_JWT_SECRET or provide in config."
            )

        return JWTAuthAdapter(
            secret_key=secret_key,
            algorithm=options.get("algorithm", config.jwt_algorithm),
            issuer=options.get("issuer", "postboard"),
            audience=options.get("audience", "postboard-api"),
        )

    else:
        raise ValueError(f"Unsupported auth provider: {provider}")
