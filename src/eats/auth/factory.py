"""Factory for the session-token auth adapter."""

from __future__ import annotations

import os

from ..config import settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter


def get_auth_adapter() -> AuthAdapter:
    """Create the JWT adapter from settings, letting EATS_JWT_SECRET override."""
    secret_key = os.getenv("EATS_JWT_SECRET") or settings.jwt_secret
    if not secret_key:
        raise ValueError("JWT secret key is required. Set EATS_JWT_SECRET.")

    return JWTAuthAdapter(
        secret_key=secret_key,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        token_expiry_hours=settings.jwt_expiry_hours,
    )
