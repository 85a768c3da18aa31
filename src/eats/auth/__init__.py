"""Authentication and authorization system for Eats."""

from .adapters.base import (
    AuthAdapter,
    AuthenticationError,
    AuthenticationRequiredError,
    AuthorizationError,
    Principal,
)
from .context import AuthContext
from .factory import get_auth_adapter
from .middleware import get_auth_context

__all__ = [
    "AuthAdapter",
    "AuthenticationError",
    "AuthenticationRequiredError",
    "AuthorizationError",
    "Principal",
    "AuthContext",
    "get_auth_adapter",
    "get_auth_context",
]
