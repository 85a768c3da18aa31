"""
Initial schema: users, verifications, categories and restaurants.

Revision ID: 20261001_000000_initial_schema
Revises:
Create Date: 2026-10-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20261001_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    # users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("email", name="users_email_key"),
        sa.CheckConstraint(
            "role IN ('client', 'owner', 'delivery')", name="ck_users_role_valid"
        ),
    )

    # verifications
    op.create_table(
        "verifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="verifications_user_id_fkey"
        ),
        sa.PrimaryKeyConstraint("id", name="verifications_pkey"),
        sa.UniqueConstraint("code", name="verifications_code_key"),
        sa.UniqueConstraint("user_id", name="verifications_user_id_key"),
    )

    # categories
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("cover_img", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="categories_pkey"),
        sa.UniqueConstraint("name", name="categories_name_key"),
        sa.UniqueConstraint("slug", name="categories_slug_key"),
    )

    # restaurants
    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("cover_img", sa.Text(), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["owner_id"], ["users.id"], ondelete="CASCADE", name="restaurants_owner_id_fkey"
        ),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            ondelete="SET NULL",
            name="restaurants_category_id_fkey",
        ),
        sa.PrimaryKeyConstraint("id", name="restaurants_pkey"),
    )
    op.create_index("idx_restaurants_owner", "restaurants", ["owner_id"])
    op.create_index("idx_restaurants_category", "restaurants", ["category_id"])
    op.create_index("idx_restaurants_name", "restaurants", ["name"])


def downgrade() -> None:
    # drop in reverse dependency order
    op.drop_index("idx_restaurants_name", table_name="restaurants")
    op.drop_index("idx_restaurants_category", table_name="restaurants")
    op.drop_index("idx_restaurants_owner", table_name="restaurants")
    op.drop_table("restaurants")

    op.drop_table("categories")
    op.drop_table("verifications")
    op.drop_table("users")
