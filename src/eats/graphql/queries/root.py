"""
Root GraphQL query definitions
"""

import strawberry

from ..types.outputs import (
    AllCategoriesOutput,
    CategoryOutput,
    RestaurantOutput,
    RestaurantsOutput,
    SearchRestaurantOutput,
    UserProfileOutput,
)
from ..types.user import User


# Input types for queries
@strawberry.input
class CategoryInput:
    """Input for looking up a category by slug."""

    slug: str
    page: int = 1


@strawberry.input
class RestaurantsInput:
    """Input for listing restaurants."""

    page: int = 1


@strawberry.input
class RestaurantInput:
    """Input for fetching a single restaurant."""

    restaurant_id: int


@strawberry.input
class SearchRestaurantInput:
    """Input for searching restaurants by name."""

    query: str
    page: int = 1


@strawberry.type
class Query:
    """Root GraphQL query type."""

    # User queries
    @strawberry.field
    async def me(self, info: strawberry.Info) -> User:
        """Get the current authenticated user."""
        from ..resolvers.user import resolve_current_user

        return await resolve_current_user(info)

    @strawberry.field(name="userProfile")
    async def user_profile(self, info: strawberry.Info, user_id: int) -> UserProfileOutput:
        """Get a user's profile by ID."""
        from ..resolvers.user import resolve_user_profile

        return await resolve_user_profile(info, user_id)

    # Category queries
    @strawberry.field(name="allCategories")
    async def all_categories(self, info: strawberry.Info) -> AllCategoriesOutput:
        """Get every category."""
        from ..resolvers.restaurant import resolve_all_categories

        return await resolve_all_categories(info)

    @strawberry.field
    async def category(self, info: strawberry.Info, input: CategoryInput) -> CategoryOutput:
        """Get a category by slug with one page of its restaurants."""
        from ..resolvers.restaurant import resolve_category

        return await resolve_category(info, input)

    # Restaurant queries
    @strawberry.field
    async def restaurants(self, info: strawberry.Info, input: RestaurantsInput) -> RestaurantsOutput:
        """Get one page of all restaurants."""
        from ..resolvers.restaurant import resolve_restaurants

        return await resolve_restaurants(info, input)

    @strawberry.field
    async def restaurant(self, info: strawberry.Info, input: RestaurantInput) -> RestaurantOutput:
        """Get a restaurant by ID."""
        from ..resolvers.restaurant import resolve_restaurant

        return await resolve_restaurant(info, input)

    @strawberry.field(name="searchRestaurant")
    async def search_restaurant(
        self, info: strawberry.Info, input: SearchRestaurantInput
    ) -> SearchRestaurantOutput:
        """Search restaurants by name."""
        from ..resolvers.restaurant import search_restaurants

        return await search_restaurants(info, input)
