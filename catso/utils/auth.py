"""Authentication utilities."""

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catso.config import config
from catso.database import AsyncSessionLocal
from catso.models import User


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def get_password_hash(password: str) -> str:
    """Hash a password."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def create_access_token(
    data: dict[str, str], expires_delta: timedelta | None = None
) -> str:
    """Create JWT access token."""
    to_encode: dict[str, object] = {**data}
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(UTC) + expires_delta
    encoded_jwt: str = jwt.encode(
        to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM
    )
    return encoded_jwt


def decode_access_token(token: str) -> str | None:
    """Decode JWT access token and return user email."""
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        return None
    email: str | None = payload.get("sub")
    return email


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get user by email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def authenticate_user(
    db: AsyncSession, email: str, password: str
) -> User | None:
    """Return the active user matching the credentials, if any."""
    user = await get_user_by_email(db, email)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def create_user(
    db: AsyncSession,
    email: str,
    password: str,
    *,
    name: str | None = None,
    is_admin: bool = False,
) -> User:
    """Create a new user."""
    user = User(
        email=email,
        name=name,
        hashed_password=get_password_hash(password),
        is_admin=is_admin,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def ensure_initial_admin() -> None:
    """Create the configured admin account on an empty install."""
    email = config.INITIAL_ADMIN_EMAIL
    password = config.INITIAL_ADMIN_PASSWORD
    if not email or not password:
        return

    async with AsyncSessionLocal() as session:
        existing_any = await session.execute(select(User.id).limit(1))
        if existing_any.scalar_one_or_none() is not None:
            return

        user = User(
            email=email,
            name="Admin",
            hashed_password=get_password_hash(password),
            is_active=True,
            is_admin=True,
        )
        session.add(user)
        await session.commit()
