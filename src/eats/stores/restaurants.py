"""Restaurant store: owner-scoped mutations and paginated browsing."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Restaurants, Users
from ..logging import get_logger
from .categories import get_or_create_category
from .pagination import PAGE_SIZE, Page, page_offset, total_pages
from .results import ErrorKind, Result

logger = get_logger(__name__)


def is_restaurant_owner(owner: Users, restaurant: Restaurants) -> bool:
    """Only the account that created a restaurant may change or remove it."""
    return owner.id == restaurant.owner_id


async def _load_owned(
    session: AsyncSession, owner: Users, restaurant_id: int, action: str
) -> Result[Restaurants]:
    restaurant = await session.get(Restaurants, restaurant_id)
    if not restaurant:
        return Result.failure(ErrorKind.NOT_FOUND, "Restaurant not found")
    if not is_restaurant_owner(owner, restaurant):
        logger.info(
            "Ownership check failed",
            restaurant_id=restaurant_id,
            owner_id=restaurant.owner_id,
            caller_id=owner.id,
            action=action,
        )
        return Result.failure(
            ErrorKind.FORBIDDEN, f"You can't {action} a restaurant that you don't own"
        )
    return Result.success(restaurant)


async def create_restaurant(
    session: AsyncSession,
    owner: Users,
    *,
    name: str,
    cover_img: str,
    address: str,
    category_name: str,
) -> Result[Restaurants]:
    """Create a restaurant owned by ``owner`` in the named (possibly new) category."""
    try:
        category = await get_or_create_category(session, category_name)
        restaurant = Restaurants(
            name=name,
            cover_img=cover_img,
            address=address,
            owner_id=owner.id,
            category_id=category.id,
        )
        session.add(restaurant)
        await session.commit()
    except SQLAlchemyError as e:
        logger.error("Failed to create restaurant", owner_id=owner.id, error=str(e))
        await session.rollback()
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not create restaurant")

    logger.info(
        "Restaurant created",
        restaurant_id=restaurant.id,
        owner_id=owner.id,
        category_id=restaurant.category_id,
    )
    return Result.success(restaurant)


async def edit_restaurant(
    session: AsyncSession,
    owner: Users,
    restaurant_id: int,
    *,
    name: str | None = None,
    cover_img: str | None = None,
    address: str | None = None,
    category_name: str | None = None,
) -> Result[Restaurants]:
    """Merge the supplied fields into an owned restaurant."""
    try:
        loaded = await _load_owned(session, owner, restaurant_id, "edit")
        if not loaded.ok:
            return loaded
        restaurant = loaded.value
        if restaurant is None:
            return Result.failure(ErrorKind.NOT_FOUND, "Restaurant not found")

        if category_name:
            category = await get_or_create_category(session, category_name)
            restaurant.category_id = category.id
        if name is not None:
            restaurant.name = name
        if cover_img is not None:
            restaurant.cover_img = cover_img
        if address is not None:
            restaurant.address = address

        await session.commit()
    except SQLAlchemyError as e:
        logger.error("Failed to edit restaurant", restaurant_id=restaurant_id, error=str(e))
        await session.rollback()
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not edit restaurant")

    logger.info("Restaurant updated", restaurant_id=restaurant_id, owner_id=owner.id)
    return Result.success(restaurant)


async def delete_restaurant(
    session: AsyncSession, owner: Users, restaurant_id: int
) -> Result[None]:
    try:
        loaded = await _load_owned(session, owner, restaurant_id, "delete")
        if not loaded.ok:
            return Result.failure(loaded.error, loaded.message)  # type: ignore[arg-type]

        await session.delete(loaded.value)
        await session.commit()
    except SQLAlchemyError as e:
        logger.error("Failed to delete restaurant", restaurant_id=restaurant_id, error=str(e))
        await session.rollback()
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not delete restaurant")

    logger.info("Restaurant deleted", restaurant_id=restaurant_id, owner_id=owner.id)
    return Result.success(None)


async def find_restaurant_by_id(session: AsyncSession, restaurant_id: int) -> Result[Restaurants]:
    try:
        restaurant = await session.get(Restaurants, restaurant_id)
    except SQLAlchemyError as e:
        logger.error("Failed to load restaurant", restaurant_id=restaurant_id, error=str(e))
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not find restaurant")

    if not restaurant:
        return Result.failure(ErrorKind.NOT_FOUND, "Restaurant not found")
    return Result.success(restaurant)


async def _paginate(session: AsyncSession, condition, page: int) -> Page[Restaurants]:
    stmt = select(Restaurants).order_by(Restaurants.id).limit(PAGE_SIZE).offset(page_offset(page))
    count_stmt = select(func.count()).select_from(Restaurants)
    if condition is not None:
        stmt = stmt.where(condition)
        count_stmt = count_stmt.where(condition)

    items = list((await session.execute(stmt)).scalars().all())
    total = (await session.execute(count_stmt)).scalar_one()
    return Page(items=items, total_results=total, total_pages=total_pages(total))


async def list_restaurants(session: AsyncSession, page: int = 1) -> Result[Page[Restaurants]]:
    try:
        return Result.success(await _paginate(session, None, page))
    except SQLAlchemyError as e:
        logger.error("Failed to list restaurants", page=page, error=str(e))
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not load restaurants")


async def search_restaurants_by_name(
    session: AsyncSession, query: str, page: int = 1
) -> Result[Page[Restaurants]]:
    """
    Case-insensitive substring search on restaurant names.

    No match is a successful, empty page rather than an error.
    """
    try:
        condition = Restaurants.name.icontains(query, autoescape=True)
        return Result.success(await _paginate(session, condition, page))
    except SQLAlchemyError as e:
        logger.error("Failed to search restaurants", query=query, page=page, error=str(e))
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not search restaurants")
