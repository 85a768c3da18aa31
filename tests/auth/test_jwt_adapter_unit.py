"""Unit tests for the JWT session-token adapter and its factory."""

import os
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt
import pytest

from eats.auth.adapters.base import AuthenticationError
from eats.auth.adapters.jwt import JWTAuthAdapter
from eats.auth.factory import get_auth_adapter
from eats.config import settings


@pytest.fixture
def secret_key():
    return "test-secret-key-for-testing-only"


@pytest.fixture
def adapter(secret_key):
    return JWTAuthAdapter(
        secret_key=secret_key,
        algorithm="HS256",
        issuer="test-eats",
        audience="test-api",
    )


def _encode(secret_key, **overrides):
    now = datetime.now(UTC)
    payload = {
        "iss": "test-eats",
        "aud": "test-api",
        "sub": "42",
        "iat": now,
        "nbf": now,
        "exp": now + timedelta(hours=1),
    }
    payload.update(overrides)
    return jwt.encode(payload, secret_key, algorithm="HS256")


class TestJWTAdapter:
    """Test JWT authentication adapter."""

    @pytest.mark.asyncio
    async def test_issue_then_verify(self, adapter):
        token = await adapter.issue_token(user_id=7, claims={"role": "owner"})

        principal = await adapter.verify_token(token)

        assert principal["provider"] == "jwt"
        assert principal["subject"] == "7"
        assert principal["role"] == "owner"
        assert principal["claims"]["iss"] == "test-eats"

    @pytest.mark.asyncio
    async def test_verify_expired_token(self, adapter, secret_key):
        past = datetime.now(UTC) - timedelta(hours=2)
        token = _encode(secret_key, iat=past, nbf=past, exp=past + timedelta(minutes=30))

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_wrong_signature(self, adapter):
        token = _encode("some-other-secret")

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_wrong_audience(self, adapter, secret_key):
        token = _encode(secret_key, aud="someone-else")

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_missing_subject(self, adapter, secret_key):
        token = _encode(secret_key, sub="")

        with pytest.raises(AuthenticationError, match="Missing 'sub' claim"):
            await adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_expiry_follows_configuration(self, secret_key):
        adapter = JWTAuthAdapter(secret_key=secret_key, token_expiry_hours=2)

        token = await adapter.issue_token(user_id=1)
        claims = jwt.decode(token, options={"verify_signature": False})

        assert claims["exp"] - claims["iat"] == 2 * 3600


class TestAuthFactory:
    """Test auth adapter factory."""

    @patch.dict(os.environ, {"EATS_JWT_SECRET": "env-secret"})
    def test_env_secret_wins(self):
        adapter = get_auth_adapter()

        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == "env-secret"
        assert adapter.issuer == settings.jwt_issuer
        assert adapter.audience == settings.jwt_audience

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_secret(self):
        with patch.object(settings, "jwt_secret", None):
            with pytest.raises(ValueError, match="JWT secret key is required"):
                get_auth_adapter()
