"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.outputs import (
    CreateAccountOutput,
    CreateRestaurantOutput,
    DeleteRestaurantOutput,
    EditProfileOutput,
    EditRestaurantOutput,
    LoginOutput,
    VerifyEmailOutput,
)
from ..types.user import UserRole


# Input types for mutations
@strawberry.input
class CreateAccountInput:
    """Input for signing up."""

    email: str
    password: str
    role: UserRole


@strawberry.input
class LoginInput:
    """Input for logging in."""

    email: str
    password: str


@strawberry.input
class EditProfileInput:
    """Input for editing the caller's profile."""

    email: str | None = None
    password: str | None = None


@strawberry.input
class VerifyEmailInput:
    """Input for confirming an email address."""

    code: str


@strawberry.input
class CreateRestaurantInput:
    """Input for creating a restaurant."""

    name: str
    cover_img: str
    address: str
    category_name: str


@strawberry.input
class EditRestaurantInput:
    """Input for editing a restaurant."""

    restaurant_id: int
    name: str | None = None
    cover_img: str | None = None
    address: str | None = None
    category_name: str | None = None


@strawberry.input
class DeleteRestaurantInput:
    """Input for deleting a restaurant."""

    restaurant_id: int


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Account mutations
    @strawberry.mutation(name="createAccount")
    async def create_account(
        self, info: strawberry.Info, input: CreateAccountInput
    ) -> CreateAccountOutput:
        """Sign up and send a verification email."""
        from ..resolvers.user import create_account

        return await create_account(info, input)

    @strawberry.mutation
    async def login(self, info: strawberry.Info, input: LoginInput) -> LoginOutput:
        """Exchange credentials for a session token."""
        from ..resolvers.user import login

        return await login(info, input)

    @strawberry.mutation(name="editProfile")
    async def edit_profile(self, info: strawberry.Info, input: EditProfileInput) -> EditProfileOutput:
        """Edit the current user's email and/or password."""
        from ..resolvers.user import edit_profile

        return await edit_profile(info, input)

    @strawberry.mutation(name="verifyEmail")
    async def verify_email(self, info: strawberry.Info, input: VerifyEmailInput) -> VerifyEmailOutput:
        """Consume a verification code."""
        from ..resolvers.user import verify_email

        return await verify_email(info, input)

    # Restaurant mutations
    @strawberry.mutation(name="createRestaurant")
    async def create_restaurant(
        self, info: strawberry.Info, input: CreateRestaurantInput
    ) -> CreateRestaurantOutput:
        """Create a restaurant owned by the caller."""
        from ..resolvers.restaurant import create_restaurant

        return await create_restaurant(info, input)

    @strawberry.mutation(name="editRestaurant")
    async def edit_restaurant(
        self, info: strawberry.Info, input: EditRestaurantInput
    ) -> EditRestaurantOutput:
        """Edit a restaurant the caller owns."""
        from ..resolvers.restaurant import edit_restaurant

        return await edit_restaurant(info, input)

    @strawberry.mutation(name="deleteRestaurant")
    async def delete_restaurant(
        self, info: strawberry.Info, input: DeleteRestaurantInput
    ) -> DeleteRestaurantOutput:
        """Delete a restaurant the caller owns."""
        from ..resolvers.restaurant import delete_restaurant

        return await delete_restaurant(info, input)
