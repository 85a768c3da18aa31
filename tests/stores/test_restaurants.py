"""
Tests for owner-scoped restaurant mutations, browsing and search
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from eats.dbmodels import Categories, Restaurants, UserRole, Users
from eats.stores import ErrorKind, categories, restaurants


async def _make_owner(db_session, email="owner@example.com") -> Users:
    owner = Users(email=email, password="pw", role=UserRole.OWNER)
    db_session.add(owner)
    await db_session.commit()
    return owner


async def _create(db_session, owner, name="Bada Korean", category_name="Korean BBQ"):
    result = await restaurants.create_restaurant(
        db_session,
        owner,
        name=name,
        cover_img="https://img.example.com/cover.png",
        address="123 Main St",
        category_name=category_name,
    )
    assert result.ok, result.message
    return result.value


def test_is_restaurant_owner():
    owner = Users(id=1, email="a@example.com", password="pw", role=UserRole.OWNER)
    mine = Restaurants(id=10, name="A", cover_img="c", address="a", owner_id=1)
    theirs = Restaurants(id=11, name="B", cover_img="c", address="a", owner_id=2)

    assert restaurants.is_restaurant_owner(owner, mine)
    assert not restaurants.is_restaurant_owner(owner, theirs)


class TestCreateRestaurant:
    @pytest.mark.asyncio
    async def test_creates_in_new_category(self, db_session):
        owner = await _make_owner(db_session)

        restaurant = await _create(db_session, owner)

        assert restaurant.owner_id == owner.id
        category = await db_session.get(Categories, restaurant.category_id)
        assert category.slug == "korean-bbq"
        assert category.name == "korean bbq"

    @pytest.mark.asyncio
    async def test_reuses_existing_category(self, db_session):
        owner = await _make_owner(db_session)

        first = await _create(db_session, owner, name="One", category_name="Korean BBQ")
        second = await _create(db_session, owner, name="Two", category_name="  korean bbq ")

        assert first.category_id == second.category_id
        rows = (await db_session.execute(select(Categories))).scalars().all()
        assert len(rows) == 1


class TestEditRestaurant:
    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, db_session):
        owner = await _make_owner(db_session)
        restaurant = await _create(db_session, owner)

        result = await restaurants.edit_restaurant(
            db_session, owner, restaurant.id, name="Bada Korean Grill"
        )

        assert result.ok
        assert result.value.name == "Bada Korean Grill"
        assert result.value.address == "123 Main St"
        assert result.value.cover_img == "https://img.example.com/cover.png"

    @pytest.mark.asyncio
    async def test_category_change_creates_category(self, db_session):
        owner = await _make_owner(db_session)
        restaurant = await _create(db_session, owner)
        old_category_id = restaurant.category_id

        result = await restaurants.edit_restaurant(
            db_session, owner, restaurant.id, category_name="Street Food"
        )

        assert result.ok
        assert result.value.category_id != old_category_id
        category = await db_session.get(Categories, result.value.category_id)
        assert category.slug == "street-food"

    @pytest.mark.asyncio
    async def test_missing_restaurant(self, db_session):
        owner = await _make_owner(db_session)

        result = await restaurants.edit_restaurant(db_session, owner, 404, name="x")

        assert result.error == ErrorKind.NOT_FOUND
        assert result.message == "Restaurant not found"

    @pytest.mark.asyncio
    async def test_other_owner_is_forbidden(self, db_session):
        owner = await _make_owner(db_session)
        intruder = await _make_owner(db_session, email="intruder@example.com")
        restaurant = await _create(db_session, owner)

        result = await restaurants.edit_restaurant(db_session, intruder, restaurant.id, name="Mine")

        assert result.error == ErrorKind.FORBIDDEN
        assert result.message == "You can't edit a restaurant that you don't own"
        assert restaurant.name == "Bada Korean"


class TestDeleteRestaurant:
    @pytest.mark.asyncio
    async def test_owner_deletes(self, db_session):
        owner = await _make_owner(db_session)
        restaurant = await _create(db_session, owner)

        result = await restaurants.delete_restaurant(db_session, owner, restaurant.id)

        assert result.ok
        assert await db_session.get(Restaurants, restaurant.id) is None

    @pytest.mark.asyncio
    async def test_other_owner_is_forbidden(self, db_session):
        owner = await _make_owner(db_session)
        intruder = await _make_owner(db_session, email="intruder@example.com")
        restaurant = await _create(db_session, owner)

        result = await restaurants.delete_restaurant(db_session, intruder, restaurant.id)

        assert result.error == ErrorKind.FORBIDDEN
        assert result.message == "You can't delete a restaurant that you don't own"
        found = await restaurants.find_restaurant_by_id(db_session, restaurant.id)
        assert found.ok


class TestBrowse:
    @pytest.mark.asyncio
    async def test_find_by_id(self, db_session):
        owner = await _make_owner(db_session)
        restaurant = await _create(db_session, owner)

        found = await restaurants.find_restaurant_by_id(db_session, restaurant.id)
        missing = await restaurants.find_restaurant_by_id(db_session, restaurant.id + 1)

        assert found.value.name == "Bada Korean"
        assert missing.error == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_pagination(self, db_session):
        owner = await _make_owner(db_session)
        for i in range(26):
            db_session.add(
                Restaurants(
                    name=f"Place {i}", cover_img="c", address="a", owner_id=owner.id
                )
            )
        await db_session.commit()

        first = await restaurants.list_restaurants(db_session, 1)
        second = await restaurants.list_restaurants(db_session, 2)
        beyond = await restaurants.list_restaurants(db_session, 3)

        assert len(first.value.items) == 25
        assert [r.name for r in second.value.items] == ["Place 25"]
        assert beyond.value.items == []
        assert first.value.total_results == second.value.total_results == 26
        assert first.value.total_pages == 2

    @pytest.mark.asyncio
    async def test_page_below_one_reads_first_page(self, db_session):
        owner = await _make_owner(db_session)
        await _create(db_session, owner)

        result = await restaurants.list_restaurants(db_session, 0)

        assert [r.name for r in result.value.items] == ["Bada Korean"]

    @pytest.mark.asyncio
    async def test_empty_listing(self, db_session):
        result = await restaurants.list_restaurants(db_session)

        assert result.ok
        assert result.value.total_results == 0
        assert result.value.total_pages == 0


class TestSearch:
    @pytest.mark.asyncio
    async def test_case_insensitive_substring(self, db_session):
        owner = await _make_owner(db_session)
        await _create(db_session, owner, name="Bada Korean")
        await _create(db_session, owner, name="Seoul Kitchen")
        await _create(db_session, owner, name="KOREAN house")

        result = await restaurants.search_restaurants_by_name(db_session, "korean")

        assert result.ok
        assert sorted(r.name for r in result.value.items) == ["Bada Korean", "KOREAN house"]
        assert result.value.total_results == 2

    @pytest.mark.asyncio
    async def test_no_match_is_empty_success(self, db_session):
        owner = await _make_owner(db_session)
        await _create(db_session, owner)

        result = await restaurants.search_restaurants_by_name(db_session, "taco")

        assert result.ok
        assert result.value.items == []
        assert result.value.total_pages == 0

    @pytest.mark.asyncio
    async def test_wildcards_match_literally(self, db_session):
        owner = await _make_owner(db_session)
        await _create(db_session, owner, name="100% Burger")
        await _create(db_session, owner, name="1000 Burgers")

        result = await restaurants.search_restaurants_by_name(db_session, "100%")

        assert [r.name for r in result.value.items] == ["100% Burger"]


class TestStorageFailures:
    @pytest.mark.asyncio
    async def test_create_restaurant_is_rolled_back_and_masked(self, db_session):
        owner = await _make_owner(db_session)
        await categories.get_or_create_category(db_session, "Korean BBQ")
        await db_session.commit()
        failing_commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("database is locked"))
        )

        with (
            patch.object(AsyncSession, "commit", failing_commit),
            patch.object(restaurants, "logger") as log,
        ):
            result = await restaurants.create_restaurant(
                db_session,
                owner,
                name="Bada Korean",
                cover_img="https://img.example.com/cover.png",
                address="123 Main St",
                category_name="Korean BBQ",
            )

        assert not result.ok
        assert result.error == ErrorKind.PERSISTENCE_ERROR
        assert result.message == "Could not create restaurant"
        assert result.value is None
        assert "database is locked" in log.error.call_args.kwargs["error"]
        assert (await db_session.execute(select(Restaurants))).scalars().all() == []
        assert len((await db_session.execute(select(Categories))).scalars().all()) == 1

    @pytest.mark.asyncio
    async def test_listing_failure_is_masked(self, db_session):
        failing_execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("no such table: restaurants"))
        )

        with patch.object(AsyncSession, "execute", failing_execute):
            result = await restaurants.list_restaurants(db_session, page=1)

        assert result.error == ErrorKind.PERSISTENCE_ERROR
        assert result.message == "Could not load restaurants"
