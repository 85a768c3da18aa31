from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...auth.adapters.base import AuthenticationRequiredError
from ...database.connection import get_async_session
from ...dbmodels import Categories, UserRole, Users
from ...logging import get_logger
from ...stores import categories, restaurants
from ..access_control import require_auth_context, require_role
from ..types.outputs import (
    AllCategoriesOutput,
    CategoryOutput,
    CreateRestaurantOutput,
    DeleteRestaurantOutput,
    EditRestaurantOutput,
    RestaurantOutput,
    RestaurantsOutput,
    SearchRestaurantOutput,
)
from ..types.restaurant import Category, Restaurant

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from ..mutations.root import (
        CreateRestaurantInput,
        DeleteRestaurantInput,
        EditRestaurantInput,
    )
    from ..queries.root import (
        CategoryInput,
        RestaurantInput,
        RestaurantsInput,
        SearchRestaurantInput,
    )

logger = get_logger(__name__)


async def _require_owner(info: strawberry.Info, session: AsyncSession) -> Users:
    """Resolve the caller as an account holding the owner role."""
    auth_context = await require_auth_context(info)
    require_role(auth_context, [UserRole.OWNER])

    owner = await session.get(Users, auth_context.user_id)
    if owner is None:
        raise AuthenticationRequiredError("Authentication required")
    return owner


# Query resolvers
async def resolve_all_categories(info: strawberry.Info) -> AllCategoriesOutput:
    async with get_async_session() as session:
        result = await categories.list_categories(session)
    items = [Category.from_model(c) for c in result.value] if result.ok and result.value else []
    return AllCategoriesOutput.from_result(result, categories=items if result.ok else None)


async def resolve_category(info: strawberry.Info, input: CategoryInput) -> CategoryOutput:
    async with get_async_session() as session:
        result = await categories.find_category_by_slug(session, input.slug, input.page)

    if not result.ok or result.value is None:
        return CategoryOutput.from_result(result)

    page = result.value.restaurants
    return CategoryOutput.from_result(
        result,
        category=Category.from_model(
            result.value.category,
            restaurants=[Restaurant.from_model(r) for r in page.items],
        ),
        total_pages=page.total_pages,
        total_results=page.total_results,
    )


async def resolve_restaurants(info: strawberry.Info, input: RestaurantsInput) -> RestaurantsOutput:
    async with get_async_session() as session:
        result = await restaurants.list_restaurants(session, input.page)

    if not result.ok or result.value is None:
        return RestaurantsOutput.from_result(result)

    page = result.value
    return RestaurantsOutput.from_result(
        result,
        results=[Restaurant.from_model(r) for r in page.items],
        total_pages=page.total_pages,
        total_results=page.total_results,
    )


async def resolve_restaurant(info: strawberry.Info, input: RestaurantInput) -> RestaurantOutput:
    async with get_async_session() as session:
        result = await restaurants.find_restaurant_by_id(session, input.restaurant_id)

    restaurant = Restaurant.from_model(result.value) if result.ok and result.value else None
    return RestaurantOutput.from_result(result, restaurant=restaurant)


async def search_restaurants(
    info: strawberry.Info, input: SearchRestaurantInput
) -> SearchRestaurantOutput:
    async with get_async_session() as session:
        result = await restaurants.search_restaurants_by_name(session, input.query, input.page)

    if not result.ok or result.value is None:
        return SearchRestaurantOutput.from_result(result)

    page = result.value
    return SearchRestaurantOutput.from_result(
        result,
        restaurants=[Restaurant.from_model(r) for r in page.items],
        total_pages=page.total_pages,
        total_results=page.total_results,
    )


# Field resolvers
async def resolve_restaurant_category(
    restaurant: Restaurant, info: strawberry.Info
) -> Category | None:
    async with get_async_session() as session:
        category = await session.get(Categories, restaurant.category_id)
    return Category.from_model(category) if category else None


async def resolve_category_restaurant_count(category: Category, info: strawberry.Info) -> int:
    async with get_async_session() as session:
        return await categories.count_restaurants(session, category.id)


# Mutation resolvers
async def create_restaurant(
    info: strawberry.Info, input: CreateRestaurantInput
) -> CreateRestaurantOutput:
    async with get_async_session() as session:
        owner = await _require_owner(info, session)
        result = await restaurants.create_restaurant(
            session,
            owner,
            name=input.name,
            cover_img=input.cover_img,
            address=input.address,
            category_name=input.category_name,
        )
    return CreateRestaurantOutput.from_result(
        result, restaurant_id=result.value.id if result.ok and result.value else None
    )


async def edit_restaurant(info: strawberry.Info, input: EditRestaurantInput) -> EditRestaurantOutput:
    async with get_async_session() as session:
        owner = await _require_owner(info, session)
        result = await restaurants.edit_restaurant(
            session,
            owner,
            input.restaurant_id,
            name=input.name,
            cover_img=input.cover_img,
            address=input.address,
            category_name=input.category_name,
        )
    return EditRestaurantOutput.from_result(result)


async def delete_restaurant(
    info: strawberry.Info, input: DeleteRestaurantInput
) -> DeleteRestaurantOutput:
    async with get_async_session() as session:
        owner = await _require_owner(info, session)
        result = await restaurants.delete_restaurant(session, owner, input.restaurant_id)
    return DeleteRestaurantOutput.from_result(result)
