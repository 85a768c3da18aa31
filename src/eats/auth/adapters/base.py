"""Base authentication adapter interface and types."""

from __future__ import annotations

from typing import Literal, NotRequired, Protocol, TypedDict


class Principal(TypedDict):
    """Identity extracted from an incoming token."""

    provider: Literal["jwt"]
    subject: str  # local user id, as a string
    role: NotRequired[str]
    claims: NotRequired[dict]


class AuthAdapter(Protocol):
    """Token issuing and verification interface."""

    async def verify_token(self, token: str) -> Principal:
        """
        Verify a token and return the principal identity.

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def issue_token(self, user_id: int | None = None, claims: dict | None = None) -> str:
        """Issue a new signed token for ``user_id`` carrying extra ``claims``."""
        ...


class AuthenticationError(Exception):
    """Raised when authentication fails."""

    pass


class AuthenticationRequiredError(AuthenticationError):
    """Raised when a private operation is called without a valid session."""

    pass


class AuthorizationError(Exception):
    """Raised when authorization fails."""

    pass
