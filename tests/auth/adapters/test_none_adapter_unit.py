"""Unit tests for NoAuth authentication adapter."""

import os
from unittest.mock import patch

import pytest

from postboard.auth.adapters.base import AuthenticationError
from postboard.auth.adapters.none import NoAuthAdapter


@pytest.fixture
def none_adapter():
    return NoAuthAdapter(default_user_id="test-dev-user")


class TestNoAuthAdapter:
    """Test NoAuth authentication adapter."""

    @pytest.mark.asyncio
    async def test_verify_any_token(self, none_adapter):
        """Any non-empty token resolves to the default user."""
        principal = await none_adapter.verify_token("any-token-works")

        assert principal["provider"] == "none"
        assert principal["subject"] == "test-dev-user"
        assert principal["claims"]["mode"] == "development"

    @pytest.mark.asyncio
    async def test_long_token_is_truncated_in_claims(self, none_adapter):
        principal = await none_adapter.verify_token("x" * 64)

        assert principal["claims"]["token"] == "x" * 20 + "..."

    @pytest.mark.asyncio
    async def test_verify_empty_token_fails(self, none_adapter):
        with pytest.raises(AuthenticationError, match="Token required"):
            await none_adapter.verify_token("")

    @pytest.mark.asyncio
    async def test_issue_token(self, none_adapter):
        token = await none_adapter.issue_token(user_id="alice", claims={"role": "writer"})

        assert token == "dev-token|alice|no-auth-mode|role=writer"

    @patch.dict(os.environ, {"POSTBOARD_ENVIRONMENT": "production"})
    def test_refuses_production(self):
        with pytest.raises(RuntimeError, match="cannot be used in production"):
            NoAuthAdapter()
