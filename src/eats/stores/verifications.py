"""Verification store: single-use email verification codes, one per user."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Users, Verifications
from ..logging import get_logger
from ..security import generate_verification_code
from .results import ErrorKind, Result

logger = get_logger(__name__)


async def issue_verification(session: AsyncSession, user: Users) -> Verifications:
    """
    Create a fresh verification for ``user``, deleting any previous one.

    Flushes but does not commit; the caller owns the transaction so the
    replacement lands together with the change that required it.
    """
    await session.execute(delete(Verifications).where(Verifications.user_id == user.id))
    verification = Verifications(code=generate_verification_code(), user_id=user.id)
    session.add(verification)
    await session.flush()
    return verification


async def get_verification_by_code(session: AsyncSession, code: str) -> Verifications | None:
    stmt = select(Verifications).where(Verifications.code == code)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def consume_verification(session: AsyncSession, code: str) -> Result[Users]:
    """Mark the code's owner verified and delete the code, in one commit."""
    try:
        verification = await get_verification_by_code(session, code)
        if not verification:
            return Result.failure(ErrorKind.NOT_FOUND, "Verification not found")

        user = await session.get(Users, verification.user_id)
        if user is None:
            return Result.failure(ErrorKind.NOT_FOUND, "Verification not found")

        user.verified = True
        await session.delete(verification)
        await session.commit()

        logger.info("Email verified", user_id=user.id)
        return Result.success(user)
    except SQLAlchemyError as e:
        logger.error("Failed to verify email", error=str(e))
        await session.rollback()
        return Result.failure(ErrorKind.PERSISTENCE_ERROR, "Could not verify email")
