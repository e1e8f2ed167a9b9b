from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catso.config import config
from catso.database import get_db
from catso.main import app
from catso.models import Base, Category, Project, User
from catso.routes.auth import get_current_user, require_auth
from catso.utils.auth import get_password_hash


class AuthUser:
    def __init__(self, user_id: int, email: str, *, is_admin: bool = True) -> None:
        self.id = user_id
        self.email = email
        self.is_admin = is_admin
        self.is_active = True


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession]:
    """Bare database session with the schema and default categories."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        session.add_all(
            [
                Category(name="videoclips", title="Videoclips", order=0),
                Category(name="commercial", title="Commercial", order=1),
            ]
        )
        await session.commit()
        yield session

    await engine.dispose()


@pytest.fixture
async def test_client(
    tmp_path,
) -> AsyncGenerator[
    tuple[
        AsyncClient,
        async_sessionmaker[AsyncSession],
        int,
        int,
    ]
]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:?cache=shared")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as session:
        user = User(
            email="admin@example.com",
            name="Admin",
            hashed_password=get_password_hash("secret"),
            is_admin=True,
        )
        session.add(user)
        session.add_all(
            [
                Category(name="videoclips", title="Videoclips", order=0),
                Category(name="commercial", title="Commercial", order=1),
            ]
        )
        await session.commit()
        await session.refresh(user)

        project = Project(
            title="Sample Project",
            description="Music video for a local band",
            category="videoclips",
            image_url="https://example.com/cover.jpg",
            video_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            published=True,
            order=0,
            author_id=user.id,
        )
        session.add(project)
        await session.commit()
        await session.refresh(project)

        user_id = user.id
        project_id = project.id

    original_media_root = config.MEDIA_ROOT
    type(config).MEDIA_ROOT = tmp_path / "media"
    config.ensure_media_dirs()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    auth_user = AuthUser(user_id, "admin@example.com")

    async def override_auth() -> AuthUser:
        return auth_user

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[require_auth] = override_auth
    app.dependency_overrides[get_current_user] = override_auth

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client, session_factory, user_id, project_id

    app.dependency_overrides.clear()
    type(config).MEDIA_ROOT = original_media_root
    await engine.dispose()


@pytest.fixture
def anonymous(test_client) -> None:
    """Drop the auth overrides so requests run without a session."""

    async def no_user() -> None:
        return None

    app.dependency_overrides.pop(require_auth, None)
    app.dependency_overrides[get_current_user] = no_user


@pytest.fixture
def visitor(test_client) -> AuthUser:
    """Authenticate requests as a regular, non-admin account."""
    _client, _session_factory, user_id, _project_id = test_client
    user = AuthUser(user_id, "visitor@example.com", is_admin=False)

    async def override() -> AuthUser:
        return user

    app.dependency_overrides[require_auth] = override
    app.dependency_overrides[get_current_user] = override
    return user
