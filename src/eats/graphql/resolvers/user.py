from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...auth.adapters.base import AuthenticationRequiredError
from ...auth.factory import get_auth_adapter
from ...database.connection import get_async_session
from ...email import EmailService, get_email_service
from ...logging import get_logger
from ...stores import accounts
from ..access_control import require_auth_context
from ..types.outputs import (
    CreateAccountOutput,
    EditProfileOutput,
    LoginOutput,
    UserProfileOutput,
    VerifyEmailOutput,
)
from ..types.user import User

if TYPE_CHECKING:
    from ..mutations.root import (
        CreateAccountInput,
        EditProfileInput,
        LoginInput,
        VerifyEmailInput,
    )

logger = get_logger(__name__)


def get_email_service_from_info(info: strawberry.Info) -> EmailService:
    return info.context.get("email_service") or get_email_service()


# Query resolvers
async def resolve_current_user(info: strawberry.Info) -> User:
    """Resolve the authenticated caller's own account."""
    auth_context = await require_auth_context(info)
    if auth_context.user_id is None:
        raise AuthenticationRequiredError("Authentication required")

    async with get_async_session() as session:
        result = await accounts.find_by_id(session, auth_context.user_id)
        if not result.ok or result.value is None:
            raise AuthenticationRequiredError("Authentication required")
        return User.from_model(result.value)


async def resolve_user_profile(info: strawberry.Info, user_id: int) -> UserProfileOutput:
    await require_auth_context(info)

    async with get_async_session() as session:
        result = await accounts.find_by_id(session, user_id)
        user = User.from_model(result.value) if result.ok and result.value else None
        return UserProfileOutput.from_result(result, user=user)


# Mutation resolvers
async def create_account(info: strawberry.Info, input: CreateAccountInput) -> CreateAccountOutput:
    async with get_async_session() as session:
        result = await accounts.create_account(
            session,
            get_email_service_from_info(info),
            email=input.email,
            password=input.password,
            role=input.role.to_stored(),
        )
    return CreateAccountOutput.from_result(result)


async def login(info: strawberry.Info, input: LoginInput) -> LoginOutput:
    async with get_async_session() as session:
        result = await accounts.login(
            session, get_auth_adapter(), email=input.email, password=input.password
        )
    return LoginOutput.from_result(result, token=result.value if result.ok else None)


async def edit_profile(info: strawberry.Info, input: EditProfileInput) -> EditProfileOutput:
    auth_context = await require_auth_context(info)
    if auth_context.user_id is None:
        raise AuthenticationRequiredError("Authentication required")

    async with get_async_session() as session:
        found = await accounts.find_by_id(session, auth_context.user_id)
        if not found.ok or found.value is None:
            return EditProfileOutput.from_result(found)

        result = await accounts.edit_profile(
            session,
            get_email_service_from_info(info),
            found.value,
            email=input.email,
            password=input.password,
        )
    return EditProfileOutput.from_result(result)


async def verify_email(info: strawberry.Info, input: VerifyEmailInput) -> VerifyEmailOutput:
    async with get_async_session() as session:
        result = await accounts.verify_email(session, input.code)
    return VerifyEmailOutput.from_result(result)
