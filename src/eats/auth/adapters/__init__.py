"""Authentication adapters."""

from .base import (
    AuthAdapter,
    AuthenticationError,
    AuthenticationRequiredError,
    AuthorizationError,
    Principal,
)
from .jwt import JWTAuthAdapter

__all__ = [
    "AuthAdapter",
    "AuthenticationError",
    "AuthenticationRequiredError",
    "AuthorizationError",
    "JWTAuthAdapter",
    "Principal",
]
