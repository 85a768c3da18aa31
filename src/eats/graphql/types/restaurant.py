"""
Restaurant and Category GraphQL type definitions
"""

from __future__ import annotations

from datetime import datetime

import strawberry

from ...dbmodels import Categories, Restaurants


@strawberry.type
class Restaurant:
    """Restaurant type for GraphQL API."""

    id: int
    name: str
    cover_img: str
    address: str
    owner_id: int
    category_id: int | None
    created_at: datetime | None
    updated_at: datetime | None

    @strawberry.field
    async def category(self, info: strawberry.Info) -> Category | None:
        """Get the category this restaurant is listed under."""
        if self.category_id is None:
            return None
        from ..resolvers.restaurant import resolve_restaurant_category

        return await resolve_restaurant_category(self, info)

    @classmethod
    def from_model(cls, restaurant: Restaurants) -> Restaurant:
        return cls(
            id=restaurant.id,
            name=restaurant.name,
            cover_img=restaurant.cover_img,
            address=restaurant.address,
            owner_id=restaurant.owner_id,
            category_id=restaurant.category_id,
            created_at=restaurant.created_at,
            updated_at=restaurant.updated_at,
        )


@strawberry.type
class Category:
    """Category type for GraphQL API."""

    id: int
    name: str
    slug: str
    cover_img: str | None
    restaurants: list[Restaurant] | None = None

    @strawberry.field
    async def restaurant_count(self, info: strawberry.Info) -> int:
        """Get total number of restaurants in this category."""
        from ..resolvers.restaurant import resolve_category_restaurant_count

        return await resolve_category_restaurant_count(self, info)

    @classmethod
    def from_model(
        cls, category: Categories, restaurants: list[Restaurant] | None = None
    ) -> Category:
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            cover_img=category.cover_img,
            restaurants=restaurants,
        )
