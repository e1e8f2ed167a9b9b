"""Import new Behance projects into the portfolio.

A pass is additive: projects already in the database (same title, or a
video/source URL equal to the Behance page) are skipped and never updated.
The pass runs in one transaction, so either every new project lands or
none does.
"""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from catso.behance.api import STRATEGY_NAME as API_STRATEGY
from catso.behance.api import fetch_api_stubs
from catso.behance.detail import parse_project_detail
from catso.behance.errors import (
    NoProjectsFoundError,
    ProfileUnavailableError,
    SyncInProgressError,
)
from catso.behance.fetcher import build_client, fetch_html
from catso.behance.models import (
    CATEGORY_COMMERCIAL,
    CATEGORY_VIDEOCLIPS,
    FetchFailure,
    ProfileParseResult,
    ProjectDetail,
    ProjectStub,
    SyncResult,
)
from catso.behance.profile import parse_profile
from catso.config import config
from catso.models import SYNC_DESCRIPTION_SENTINEL, Project
from catso.services.projects import next_project_order

logger = logging.getLogger("catso.behance")

_sync_lock = asyncio.Lock()


def decide_category(title: str, video_ref: str | None) -> str:
    """Pick the gallery section for an imported project."""
    if video_ref:
        return CATEGORY_VIDEOCLIPS
    if "video" in title.lower():
        return CATEGORY_VIDEOCLIPS
    return CATEGORY_COMMERCIAL


async def find_existing_project(db: AsyncSession, stub: ProjectStub) -> Project | None:
    """Return a stored project matching the stub by title or Behance URL."""
    result = await db.execute(
        select(Project)
        .where(
            or_(
                Project.title == stub.title,
                Project.video_url == stub.source_url,
                Project.source_url == stub.source_url,
            )
        )
        .limit(1)
    )
    return result.scalars().first()


async def load_profile(
    profile_url: str,
    *,
    client: httpx.AsyncClient,
    api_key: str | None = None,
) -> ProfileParseResult:
    """Fetch and parse the profile, raising if nothing usable came back."""
    if api_key:
        api_stubs = await fetch_api_stubs(profile_url, api_key, client=client)
        if api_stubs:
            return ProfileParseResult(stubs=api_stubs, strategy=API_STRATEGY)

    html = await fetch_html(profile_url, client=client)
    if isinstance(html, FetchFailure):
        raise ProfileUnavailableError(
            f"Could not fetch the Behance profile ({html.reason}).",
            profile_url=profile_url,
            status_code=html.status_code,
        )

    parsed = parse_profile(html)
    if parsed.is_empty:
        raise NoProjectsFoundError(
            "No projects found on the Behance profile. The page layout may "
            "have changed or access may be temporarily blocked.",
            profile_url=profile_url,
        )
    return parsed


async def fetch_project_detail(
    stub: ProjectStub, *, client: httpx.AsyncClient
) -> ProjectDetail:
    """Fetch a project page; a failed fetch simply yields no details."""
    html = await fetch_html(stub.source_url, client=client)
    if isinstance(html, FetchFailure):
        logger.info("No details for %r (%s)", stub.title, html.reason)
        return ProjectDetail()
    return parse_project_detail(html)


def build_project(
    stub: ProjectStub,
    detail: ProjectDetail,
    *,
    order: int,
    author_id: int | None,
) -> Project:
    """Create the ``Project`` row for a new stub."""
    return Project(
        title=stub.title,
        description=SYNC_DESCRIPTION_SENTINEL,
        category=decide_category(stub.title, detail.video_ref),
        image_url=stub.cover_url or config.PLACEHOLDER_IMAGE_URL,
        video_url=detail.video_ref,
        extra_videos=json.dumps(detail.extra_videos) if detail.extra_videos else None,
        images=json.dumps(detail.images) if detail.images else None,
        source_url=stub.source_url,
        published=True,
        order=order,
        author_id=author_id,
    )


async def _run_sync(
    db: AsyncSession,
    profile_url: str,
    *,
    client: httpx.AsyncClient,
    author_id: int | None,
    api_key: str | None,
) -> SyncResult:
    parsed = await load_profile(profile_url, client=client, api_key=api_key)
    logger.info(
        "Processing %d Behance project(s) found via %s",
        len(parsed.stubs),
        parsed.strategy,
    )

    result = SyncResult(strategy=parsed.strategy)
    order = await next_project_order(db)

    for stub in parsed.stubs:
        existing = await find_existing_project(db, stub)
        if existing is not None:
            logger.debug("Skipping %r: already imported as #%s", stub.title, existing.id)
            result.skipped_titles.append(stub.title)
            continue

        detail = await fetch_project_detail(stub, client=client)
        project = build_project(stub, detail, order=order, author_id=author_id)
        db.add(project)
        await db.flush()
        order += 1

        logger.info(
            "Imported %r as #%s (%s)", project.title, project.id, project.category
        )
        result.imported_titles.append(stub.title)

    return result


async def sync_profile(
    db: AsyncSession,
    profile_url: str,
    *,
    author_id: int | None = None,
    client: httpx.AsyncClient | None = None,
    api_key: str | None = None,
) -> SyncResult:
    """Import every project on ``profile_url`` that is not stored yet.

    Args:
        db: Session used for lookups and inserts; committed on success
        profile_url: Behance profile page
        author_id: User recorded as author of imported projects
        client: Optional HTTP client (one is created otherwise)
        api_key: Behance API key; defaults to ``config.BEHANCE_API_KEY``.
            Pass an empty string to skip the API.

    Raises:
        SyncInProgressError: Another pass is running in this process
        ProfileUnavailableError: The profile page could not be fetched
        NoProjectsFoundError: The profile yielded no projects at all
    """
    if _sync_lock.locked():
        raise SyncInProgressError("A Behance sync is already running.", profile_url)

    if api_key is None:
        api_key = config.BEHANCE_API_KEY

    async with _sync_lock:
        try:
            if client is None:
                async with build_client() as own_client:
                    result = await _run_sync(
                        db,
                        profile_url,
                        client=own_client,
                        author_id=author_id,
                        api_key=api_key,
                    )
            else:
                result = await _run_sync(
                    db,
                    profile_url,
                    client=client,
                    author_id=author_id,
                    api_key=api_key,
                )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    logger.info(
        "Behance sync finished: %d imported, %d skipped",
        result.imported_count,
        len(result.skipped_titles),
    )
    return result


__all__ = [
    "build_project",
    "decide_category",
    "fetch_project_detail",
    "find_existing_project",
    "load_profile",
    "sync_profile",
]
