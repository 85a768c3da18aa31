"""
User GraphQL type definitions
"""

from datetime import datetime
from enum import Enum

import strawberry

from ...dbmodels import UserRole as StoredRole
from ...dbmodels import Users


@strawberry.enum(name="UserRole", description="Account role")
class UserRole(Enum):
    """Published as Client/Owner/Delivery; values are the stored role strings."""

    Client = "client"
    Owner = "owner"
    Delivery = "delivery"

    def to_stored(self) -> StoredRole:
        return StoredRole(self.value)


@strawberry.type
class User:
    """User type for GraphQL API. The password hash is never exposed."""

    id: int
    email: str
    role: UserRole
    verified: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, user: Users) -> "User":
        return cls(
            id=user.id,
            email=user.email,
            role=UserRole(user.role),
            verified=user.verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
