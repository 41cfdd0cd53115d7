"""Unit tests for auth adapter factory."""

import os
from unittest.mock import patch

import pytest

from postboard.auth.adapters.jwt import JWTAuthAdapter
from postboard.auth.adapters.none import NoAuthAdapter
from postboard.auth.factory import get_auth_adapter
from postboard.config import Settings


class TestAuthFactory:
    """Test auth adapter factory."""

    @patch.dict(os.environ, {}, clear=True)
    def test_default_none_adapter(self):
        adapter = get_auth_adapter()
        assert isinstance(adapter, NoAuthAdapter)
        assert adapter.default_user_id == "dev-user"

    @patch.dict(
        os.environ,
        {"POSTBOARD_AUTH_PROVIDER": "none", "POSTBOARD_AUTH_CONFIG": '{"default_user_id": "bob"}'},
    )
    def test_none_adapter_with_config(self):
        adapter = get_auth_adapter()
        assert isinstance(adapter, NoAuthAdapter)
        assert adapter.default_user_id == "bob"

    @patch.dict(
        os.environ, {"POSTBOARD_AUTH_PROVIDER": "jwt", "POSTBOARD_JWT_SECRET": "test-secret"}
    )
    def test_jwt_adapter_with_env_vars(self):
        adapter = get_auth_adapter()
        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == "test-secret"
        assert adapter.issuer == "postboard"

    def test_jwt_adapter_from_explicit_settings(self):
        config = Settings(
            auth_provider="jwt",
            auth_config={"secret_key": "from-config", "audience": "elsewhere"},
        )

        adapter = get_auth_adapter(config)

        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == "from-config"
        assert adapter.audience == "elsewhere"

    @patch.dict(os.environ, {"POSTBOARD_AUTH_PROVIDER": "jwt"})
    def test_jwt_adapter_missing_secret(self):
        os.environ.pop("POSTBOARD_JWT_SECRET", None)
        with pytest.raises(ValueError, match="JWT secret key is required"):
            get_auth_adapter()

    @patch.dict(os.environ, {"POSTBOARD_AUTH_PROVIDER": "unsupported"})
    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported auth provider: unsupported"):
            get_auth_adapter()
