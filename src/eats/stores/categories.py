"""Category store: lazy get-or-create by slug, listing, slug lookup."""

from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Categories, Restaurants
from ..logging import get_logger
from .pagination import PAGE_SIZE, Page, page_offset, total_pages
from .results import ErrorKind, Result

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class CategoryPage:
    category: Categories
    restaurants: Page[Restaurants]


def normalize_category_name(name: str) -> str:
    return name.strip().lower()


def slugify_category_name(name: str) -> str:
    """'  Korean BBQ ' -> 'korean-bbq'."""
    return _WHITESPACE.sub("-", normalize_category_name(name))


async def get_category_by_slug(session: AsyncSession, slug: str) -> Categories | None:
    stmt = select(Categories).where(Categories.slug == slug)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_or_create_category(session: AsyncSession, name: str) -> Categories:
    """
    Return the category whose slug matches ``name``, creating it if needed.

    The insert runs inside a SAVEPOINT so a concurrent insert of the same slug
    (unique constraint violation) rolls back only the savepoint, after which
    the winning row is read back. Storage errors other than that conflict
    propagate to the caller.
    """
    slug = slugify_category_name(name)

    existing = await get_category_by_slug(session, slug)
    if existing:
        return existing

    category = Categories(name=normalize_category_name(name), slug=slug)
    try:
        async with session.begin_nested():
            session.add(category)
    except IntegrityError:
        logger.info("Category created concurrently, reusing existing row", slug=slug)
        existing = await get_category_by_slug(session, slug)
        if existing is None:
            raise
        return existing

    logger.info("Category created", category_id=category.id, slug=slug)
    return category


async def list_categories(session: AsyncSession) -> Result[list[Categories]]:
    try:
        result = await session.execute(select(Categories).order_by(Categories.name))
        return Result.success(list(result.scalars().all()))
    except SQLAlchemyError as e:
        logger.error("Failed to load categories", error=str(e))
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not load categories")


async def count_restaurants(session: AsyncSession, category_id: int) -> int:
    stmt = select(func.count()).select_from(Restaurants).where(Restaurants.category_id == category_id)
    return (await session.execute(stmt)).scalar_one()


async def find_category_by_slug(
    session: AsyncSession, slug: str, page: int = 1
) -> Result[CategoryPage]:
    """Look up a category and one page of its restaurants."""
    try:
        category = await get_category_by_slug(session, slug)
        if not category:
            return Result.failure(ErrorKind.NOT_FOUND, "Category not found")

        stmt = (
            select(Restaurants)
            .where(Restaurants.category_id == category.id)
            .order_by(Restaurants.id)
            .limit(PAGE_SIZE)
            .offset(page_offset(page))
        )
        restaurants = list((await session.execute(stmt)).scalars().all())
        total = await count_restaurants(session, category.id)

        return Result.success(
            CategoryPage(
                category=category,
                restaurants=Page(
                    items=restaurants, total_results=total, total_pages=total_pages(total)
                ),
            )
        )
    except SQLAlchemyError as e:
        logger.error("Failed to load category", slug=slug, error=str(e))
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not load category")
