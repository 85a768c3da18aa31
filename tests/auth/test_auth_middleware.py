"""Tests for resolving the caller from a session token."""

import pytest

from eats.auth.context import ANONYMOUS
from eats.auth.middleware import get_auth_context
from eats.dbmodels import UserRole, Users


@pytest.mark.asyncio
async def test_missing_token_is_anonymous():
    context = await get_auth_context(None)

    assert context is ANONYMOUS
    assert not context.is_authenticated


@pytest.mark.asyncio
async def test_garbage_token_is_anonymous(shared_db):
    context = await get_auth_context("garbage")

    assert not context.is_authenticated


@pytest.mark.asyncio
async def test_valid_token_loads_user(db_session, jwt_adapter):
    user = Users(email="owner@example.com", password="pw", role=UserRole.OWNER)
    db_session.add(user)
    await db_session.commit()
    token = await jwt_adapter.issue_token(user_id=user.id)

    context = await get_auth_context(token)

    assert context.is_authenticated
    assert context.user_id == user.id
    assert context.role == "owner"
    assert context.token == token


@pytest.mark.asyncio
async def test_token_for_deleted_user_is_anonymous(shared_db, jwt_adapter):
    token = await jwt_adapter.issue_token(user_id=12345)

    context = await get_auth_context(token)

    assert not context.is_authenticated


@pytest.mark.asyncio
async def test_non_numeric_subject_is_anonymous(shared_db, jwt_adapter):
    token = await jwt_adapter.issue_token(claims={"sub": "abc"})

    context = await get_auth_context(token)

    assert not context.is_authenticated
