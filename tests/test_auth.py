"""Test authentication utilities and routes."""

from typing import Any

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catso.config import config
from catso.models import User
from catso.utils.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    decode_access_token,
    get_password_hash,
    get_user_by_email,
    verify_password,
)


async def test_password_hashing() -> None:
    """Test password hashing and verification."""
    password = "test_password_123"
    hashed = get_password_hash(password)

    assert hashed != password
    assert verify_password(password, hashed)
    assert not verify_password("wrong_password", hashed)


async def test_create_user(db_session: AsyncSession) -> None:
    email = "test@example.com"
    password = "test_password"

    user = await create_user(db_session, email, password)

    assert user.email == email
    assert user.hashed_password != password
    assert verify_password(password, user.hashed_password)
    assert user.is_admin is False


async def test_get_user_by_email(db_session: AsyncSession) -> None:
    await create_user(db_session, "test@example.com", "pw")

    assert await get_user_by_email(db_session, "test@example.com") is not None
    assert await get_user_by_email(db_session, "missing@example.com") is None


async def test_authenticate_user(db_session: AsyncSession) -> None:
    await create_user(db_session, "test@example.com", "right")

    assert await authenticate_user(db_session, "test@example.com", "right")
    assert await authenticate_user(db_session, "test@example.com", "wrong") is None
    assert await authenticate_user(db_session, "nobody@example.com", "right") is None


async def test_authenticate_rejects_inactive_user(db_session: AsyncSession) -> None:
    user = await create_user(db_session, "test@example.com", "right")
    user.is_active = False
    await db_session.commit()

    assert await authenticate_user(db_session, "test@example.com", "right") is None


async def test_access_token_round_trip() -> None:
    token = create_access_token(data={"sub": "test@example.com"})
    assert decode_access_token(token) == "test@example.com"
    assert decode_access_token("not-a-token") is None


@pytest.mark.asyncio
async def test_register_creates_regular_user(test_client: Any) -> None:
    client, session_factory, _user_id, _project_id = test_client

    response = await client.post(
        "/auth/register",
        json={"name": "New", "email": "New@Example.com", "password": "pw"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created"

    async with session_factory() as session:
        user = (
            await session.execute(select(User).where(User.id == body["user_id"]))
        ).scalar_one()
    assert user.email == "new@example.com"
    assert user.is_admin is False


@pytest.mark.asyncio
async def test_register_rejects_missing_fields_and_duplicates(
    test_client: Any,
) -> None:
    client, _, _, _ = test_client

    response = await client.post("/auth/register", json={"email": "x@example.com"})
    assert response.status_code == 400

    response = await client.post(
        "/auth/register",
        json={"email": "admin@example.com", "password": "pw"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_register_disabled(
    test_client: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    client, _, _, _ = test_client
    monkeypatch.setattr(config, "FEATURE_SIGNUP_ENABLED", False)

    response = await client.post(
        "/auth/register", json={"email": "x@example.com", "password": "pw"}
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_login_sets_session_cookie(test_client: Any) -> None:
    client, _, _, _ = test_client

    response = await client.post(
        "/auth/login",
        data={"email": "admin@example.com", "password": "secret"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/admin"
    assert "session_token" in response.cookies


@pytest.mark.asyncio
async def test_login_rejects_bad_password(test_client: Any) -> None:
    client, _, _, _ = test_client

    response = await client.post(
        "/auth/login",
        data={"email": "admin@example.com", "password": "nope"},
        follow_redirects=False,
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_requires_session(test_client: Any, anonymous: None) -> None:
    client, _, _, _ = test_client

    response = await client.get("/auth/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_current_user(test_client: Any) -> None:
    client, _, user_id, _ = test_client

    response = await client.get("/auth/me")

    assert response.status_code == 200
    assert response.json() == {
        "id": user_id,
        "email": "admin@example.com",
        "is_admin": True,
    }
