"""Database engine, sessions and startup migrations."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import AsyncGenerator, Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from catso.config import config


logger = logging.getLogger(__name__)

_MIGRATIONS_DIR = Path(__file__).resolve().parent / "alembic"
_LOCK_TIMEOUT_SECONDS = 30.0


def to_async_url(url: str) -> str:
    """Use the aiosqlite driver for plain SQLite URLs."""
    if url.startswith("sqlite:"):
        return url.replace("sqlite:", "sqlite+aiosqlite:", 1)
    return url


def to_sync_url(url: str) -> str:
    """Alembic runs synchronously, on an absolute SQLite path."""
    if url.startswith("sqlite+aiosqlite:"):
        url = url.replace("sqlite+aiosqlite:", "sqlite:", 1)
    if url.startswith("sqlite:///"):
        db_path = Path(url.removeprefix("sqlite:///")).expanduser().resolve()
        return f"sqlite:///{db_path}"
    return url


engine = create_async_engine(to_async_url(config.DATABASE_URL), echo=config.DEBUG)
AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Get database session."""
    async with AsyncSessionLocal() as session:
        yield session


def build_alembic_config(sync_url: str) -> AlembicConfig:
    """Build an Alembic config pointing at the bundled migrations."""
    alembic_cfg = AlembicConfig()
    alembic_cfg.set_main_option("script_location", str(_MIGRATIONS_DIR))
    alembic_cfg.set_main_option("sqlalchemy.url", sync_url)
    return alembic_cfg


@contextmanager
def _migration_lock(lock_path: Path) -> Iterator[None]:
    """Keep concurrent workers from migrating the same database at once."""
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    deadline = time.monotonic() + _LOCK_TIMEOUT_SECONDS
    while True:
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_RDWR)
            break
        except FileExistsError:
            if time.monotonic() > deadline:
                raise TimeoutError(f"Timed out waiting for {lock_path}") from None
            time.sleep(0.1)

    try:
        yield
    finally:
        os.close(fd)
        lock_path.unlink(missing_ok=True)


async def init_db() -> None:
    """Bring the schema up to the latest migration."""

    def _run_upgrade() -> None:
        alembic_cfg = build_alembic_config(to_sync_url(config.DATABASE_URL))
        with _migration_lock(config.MEDIA_ROOT / ".migrations.lock"):
            logger.info("Applying database migrations")
            command.upgrade(alembic_cfg, "head")

    await asyncio.to_thread(_run_upgrade)
