"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass

from .adapters.base import Principal


@dataclass
class AuthContext:
    """Runtime authentication context for a request."""

    user_id: int | None
    principal: Principal | None
    token: str | None
    role: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Check if the request is authenticated."""
        return self.user_id is not None and self.principal is not None


ANONYMOUS = AuthContext(user_id=None, principal=None, token=None)
