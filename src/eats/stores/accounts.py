"""Account store: signup, login, profile lookup and edit, email verification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import UserRole, Users
from ..logging import get_logger
from ..security import verify_password
from .results import ErrorKind, Result
from .verifications import consume_verification, issue_verification

if TYPE_CHECKING:
    from ..auth.adapters.base import AuthAdapter
    from ..email import EmailService

logger = get_logger(__name__)

DUPLICATE_EMAIL = "There is a user with that email already"


async def get_user_by_email(session: AsyncSession, email: str) -> Users | None:
    stmt = select(Users).where(Users.email == email)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_account(
    session: AsyncSession,
    email_service: EmailService,
    *,
    email: str,
    password: str,
    role: UserRole,
) -> Result[Users]:
    """
    Create an account and its verification, then send the verification email.

    The email is sent after the commit; its outcome is logged and never turns
    a created account into a failure.
    """
    try:
        if await get_user_by_email(session, email):
            return Result.failure(ErrorKind.ALREADY_EXISTS, DUPLICATE_EMAIL)

        user = Users(email=email, password=password, role=role, verified=False)
        session.add(user)
        await session.flush()
        verification = await issue_verification(session, user)
        await session.commit()
    except IntegrityError as e:
        logger.info("Signup lost a race on email", email=email, error=str(e))
        await session.rollback()
        return Result.failure(ErrorKind.ALREADY_EXISTS, DUPLICATE_EMAIL)
    except SQLAlchemyError as e:
        logger.error("Failed to create account", email=email, error=str(e))
        await session.rollback()
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not create account")

    logger.info("Account created", user_id=user.id, role=user.role)

    sent = await email_service.send_verification_email(user.email, verification.code)
    if not sent:
        logger.warning("Verification email not delivered", user_id=user.id)

    return Result.success(user)


async def login(
    session: AsyncSession,
    auth_adapter: AuthAdapter,
    *,
    email: str,
    password: str,
) -> Result[str]:
    """Check credentials and return a signed session token."""
    try:
        user = await get_user_by_email(session, email)
    except SQLAlchemyError as e:
        logger.error("Failed to load user for login", error=str(e))
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not log in")

    if not user:
        return Result.failure(ErrorKind.NOT_FOUND, "User not found")

    if not verify_password(password, user.password):
        logger.info("Login rejected: wrong password", user_id=user.id)
        return Result.failure(ErrorKind.INVALID_CREDENTIALS, "Wrong password")

    token = await auth_adapter.issue_token(user_id=user.id, claims={"role": user.role})
    logger.info("User logged in", user_id=user.id)
    return Result.success(token)


async def find_by_id(session: AsyncSession, user_id: int) -> Result[Users]:
    try:
        user = await session.get(Users, user_id)
    except SQLAlchemyError as e:
        logger.error("Failed to load user", user_id=user_id, error=str(e))
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not load user")

    if not user:
        return Result.failure(ErrorKind.NOT_FOUND, "User not found")
    return Result.success(user)


async def edit_profile(
    session: AsyncSession,
    email_service: EmailService,
    user: Users,
    *,
    email: str | None = None,
    password: str | None = None,
) -> Result[Users]:
    """
    Apply the supplied fields to ``user``.

    A changed email resets ``verified`` and replaces the verification code in
    the same commit as the email itself; the new code is mailed afterwards.
    """
    new_code: str | None = None
    try:
        if email is not None and email != user.email:
            other = await get_user_by_email(session, email)
            if other is not None and other.id != user.id:
                return Result.failure(ErrorKind.ALREADY_EXISTS, DUPLICATE_EMAIL)
            user.email = email
            user.verified = False
            verification = await issue_verification(session, user)
            new_code = verification.code

        if password:
            user.password = password

        await session.commit()
    except SQLAlchemyError as e:
        logger.error("Failed to edit profile", user_id=user.id, error=str(e))
        await session.rollback()
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not update profile")

    logger.info(
        "Profile updated",
        user_id=user.id,
        email_changed=new_code is not None,
        password_changed=bool(password),
    )

    if new_code is not None:
        sent = await email_service.send_verification_email(user.email, new_code)
        if not sent:
            logger.warning("Verification email not delivered", user_id=user.id)

    return Result.success(user)


async def verify_email(session: AsyncSession, code: str) -> Result[Users]:
    return await consume_verification(session, code)
