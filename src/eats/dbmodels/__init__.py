"""
Database models for Eats (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, validates

from ..security import hash_password

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class UserRole(str, Enum):
    """Account role."""

    CLIENT = "client"
    OWNER = "owner"
    DELIVERY = "delivery"


class Users(Base):
    __tablename__ = "users"
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("email", name="users_email_key"),
        CheckConstraint("role IN ('client', 'owner', 'delivery')", name="role_valid"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.now(), onupdate=func.now()
    )

    verification: Mapped["Verifications | None"] = relationship(
        "Verifications", uselist=False, back_populates="user", passive_deletes=True
    )
    restaurants: Mapped[list["Restaurants"]] = relationship(
        "Restaurants", uselist=True, back_populates="owner", passive_deletes=True
    )

    @validates("password")
    def _hash_password(self, key: str, value: str) -> str:
        # Runs only on attribute assignment, so loaded hashes are never re-hashed.
        return hash_password(value)

    @validates("role")
    def _validate_role(self, key: str, value: str | UserRole) -> str:
        return UserRole(value).value


class Verifications(Base):
    __tablename__ = "verifications"
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="verifications_user_id_fkey"
        ),
        PrimaryKeyConstraint("id", name="verifications_pkey"),
        UniqueConstraint("code", name="verifications_code_key"),
        UniqueConstraint("user_id", name="verifications_user_id_key"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    code: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.now(), onupdate=func.now()
    )

    user: Mapped["Users"] = relationship("Users", back_populates="verification")


class Categories(Base):
    __tablename__ = "categories"
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        PrimaryKeyConstraint("id", name="categories_pkey"),
        UniqueConstraint("name", name="categories_name_key"),
        UniqueConstraint("slug", name="categories_slug_key"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    cover_img: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.now(), onupdate=func.now()
    )

    restaurants: Mapped[list["Restaurants"]] = relationship(
        "Restaurants", uselist=True, back_populates="category", passive_deletes=True
    )


class Restaurants(Base):
    __tablename__ = "restaurants"
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        ForeignKeyConstraint(
            ["owner_id"], ["users.id"], ondelete="CASCADE", name="restaurants_owner_id_fkey"
        ),
        ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            ondelete="SET NULL",
            name="restaurants_category_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="restaurants_pkey"),
        Index("idx_restaurants_owner", "owner_id"),
        Index("idx_restaurants_category", "category_id"),
        Index("idx_restaurants_name", "name"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    cover_img: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[int | None] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.now(), onupdate=func.now()
    )

    owner: Mapped["Users"] = relationship("Users", back_populates="restaurants")
    category: Mapped["Categories | None"] = relationship(
        "Categories", back_populates="restaurants"
    )


target_metadata = Base.metadata

__all__ = [
    "Base",
    "UserRole",
    "Users",
    "Verifications",
    "Categories",
    "Restaurants",
    "target_metadata",
]
