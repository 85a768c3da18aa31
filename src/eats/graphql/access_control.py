"""
Shared access control logic for GraphQL resolvers
"""

from collections.abc import Iterable

import strawberry

from ..auth.adapters.base import AuthenticationRequiredError, AuthorizationError
from ..auth.context import ANONYMOUS, AuthContext
from ..auth.middleware import get_auth_context
from ..config import settings
from ..dbmodels import UserRole
from ..logging import get_logger

logger = get_logger(__name__)

_AUTH_CONTEXT_KEY = "auth_context"


async def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Extract auth context from GraphQL info object.

    The session token travels in a custom header. The resolved context is
    cached on the GraphQL context so one request authenticates once.
    """
    cached = info.context.get(_AUTH_CONTEXT_KEY)
    if cached is not None:
        return cached

    request = info.context.get("request")
    if not request:
        logger.error("Request not found in GraphQL context")
        return ANONYMOUS

    auth_context = await get_auth_context(request.headers.get(settings.jwt_header))
    info.context[_AUTH_CONTEXT_KEY] = auth_context
    return auth_context


async def require_auth_context(info: strawberry.Info) -> AuthContext:
    """Return the caller's context or fail the whole field with a top-level error."""
    auth_context = await get_auth_context_from_info(info)
    if not auth_context.is_authenticated:
        raise AuthenticationRequiredError("Authentication required")
    return auth_context


def has_role(auth_context: AuthContext, allowed: Iterable[UserRole]) -> bool:
    return auth_context.role in {role.value for role in allowed}


def require_role(auth_context: AuthContext, allowed: Iterable[UserRole]) -> None:
    allowed = list(allowed)
    if not has_role(auth_context, allowed):
        logger.info(
            "Role check failed",
            role=auth_context.role,
            allowed=[role.value for role in allowed],
        )
        raise AuthorizationError(
            "Permission denied: requires role " + " or ".join(role.value for role in allowed)
        )
