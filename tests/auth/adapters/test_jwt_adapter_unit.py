"""Unit tests for JWT authentication adapter."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from postboard.auth.adapters.base import AuthenticationError
from postboard.auth.adapters.jwt import JWTAuthAdapter


@pytest.fixture
def secret_key():
    return "test-secret-key-for-testing-only"


@pytest.fixture
def adapter(secret_key):
    return JWTAuthAdapter(
        secret_key=secret_key,
        algorithm="HS256",
        issuer="test-postboard",
        audience="test-api",
    )


def encode(secret_key: str, **overrides) -> str:
    now = datetime.now(UTC)
    payload = {
        "iss": "test-postboard",
        "aud": "test-api",
        "sub": "test-user-123",
        "iat": now,
        "nbf": now,
        "exp": now + timedelta(hours=1),
    }
    payload.update(overrides)
    return jwt.encode({k: v for k, v in payload.items() if v is not None}, secret_key, "HS256")


class TestJWTAdapter:
    """Test JWT authentication adapter."""

    @pytest.mark.asyncio
    async def test_verify_valid_token(self, adapter, secret_key):
        token = encode(secret_key, email="test@example.com", name="Test User")

        principal = await adapter.verify_token(token)

        assert principal["provider"] == "jwt"
        assert principal["subject"] == "test-user-123"
        assert principal["email"] == "test@example.com"
        assert principal["display_name"] == "Test User"
        assert principal["claims"]["sub"] == "test-user-123"

    @pytest.mark.asyncio
    async def test_expired_token(self, adapter, secret_key):
        token = encode(secret_key, exp=datetime.now(UTC) - timedelta(minutes=1))

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_wrong_secret(self, adapter):
        token = encode("some-other-secret")

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_wrong_audience(self, adapter, secret_key):
        token = encode(secret_key, aud="somebody-else")

        with pytest.raises(AuthenticationError):
            await adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_missing_subject(self, adapter, secret_key):
        token = encode(secret_key, sub=None)

        with pytest.raises(AuthenticationError, match="Missing 'sub' claim"):
            await adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_garbage_token(self, adapter):
        with pytest.raises(AuthenticationError):
            await adapter.verify_token("not.a.jwt")

    @pytest.mark.asyncio
    async def test_issued_token_round_trips(self, adapter):
        token = await adapter.issue_token(user_id="u1", claims={"email": "u1@example.com"})

        principal = await adapter.verify_token(token)

        assert principal["subject"] == "u1"
        assert principal["email"] == "u1@example.com"
