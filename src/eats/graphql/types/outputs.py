"""
Envelope output types: every operation reports ``ok`` and ``err``
"""

import strawberry

from ...stores.results import Result
from .restaurant import Category, Restaurant
from .user import User


@strawberry.type
class CoreOutput:
    ok: bool
    err: str | None = None

    @classmethod
    def from_result(cls, result: Result, **payload):
        return cls(ok=result.ok, err=result.message, **payload)


@strawberry.type
class PaginationOutput(CoreOutput):
    total_pages: int | None = None
    total_results: int | None = None


@strawberry.type
class CreateAccountOutput(CoreOutput):
    pass


@strawberry.type
class LoginOutput(CoreOutput):
    token: str | None = None


@strawberry.type
class UserProfileOutput(CoreOutput):
    user: User | None = None


@strawberry.type
class EditProfileOutput(CoreOutput):
    pass


@strawberry.type
class VerifyEmailOutput(CoreOutput):
    pass


@strawberry.type
class CreateRestaurantOutput(CoreOutput):
    restaurant_id: int | None = None


@strawberry.type
class EditRestaurantOutput(CoreOutput):
    pass


@strawberry.type
class DeleteRestaurantOutput(CoreOutput):
    pass


@strawberry.type
class AllCategoriesOutput(CoreOutput):
    categories: list[Category] | None = None


@strawberry.type
class CategoryOutput(PaginationOutput):
    category: Category | None = None


@strawberry.type
class RestaurantsOutput(PaginationOutput):
    results: list[Restaurant] | None = None


@strawberry.type
class RestaurantOutput(CoreOutput):
    restaurant: Restaurant | None = None


@strawberry.type
class SearchRestaurantOutput(PaginationOutput):
    restaurants: list[Restaurant] | None = None
