"""Resolve the caller's identity from the session token header."""

from __future__ import annotations

from ..database.connection import get_async_session
from ..dbmodels import Users
from ..logging import bind_user_id, get_logger
from .adapters.base import AuthenticationError
from .context import ANONYMOUS, AuthContext
from .factory import get_auth_adapter

logger = get_logger(__name__)


async def get_auth_context(token: str | None) -> AuthContext:
    """
    Build the AuthContext for a presented session token.

    A missing, invalid or expired token, or one whose subject no longer
    exists, yields an unauthenticated context; callers decide whether that
    is acceptable for the operation at hand.
    """
    if not token:
        return ANONYMOUS

    adapter = get_auth_adapter()
    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.info("Rejected session token", error=str(e))
        return ANONYMOUS

    try:
        user_id = int(principal["subject"])
    except ValueError:
        logger.warning("Session token subject is not a user id", subject=principal["subject"])
        return ANONYMOUS

    async with get_async_session() as session:
        user = await session.get(Users, user_id)

    if user is None:
        logger.info("Session token refers to a missing user", user_id=user_id)
        return ANONYMOUS

    bind_user_id(user.id)
    return AuthContext(user_id=user.id, principal=principal, token=token, role=user.role)
