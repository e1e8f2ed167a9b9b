"""Project queries shared by the API, the pages and the Behance sync."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catso.models import Project
from catso.utils.files import delete_upload

logger = logging.getLogger("catso.projects")


def gallery_order() -> tuple[object, ...]:
    """Manual order first, newest first among equal positions."""
    return (Project.order.asc(), Project.created_at.desc(), Project.id.desc())


async def list_projects(
    db: AsyncSession, *, include_unpublished: bool = False
) -> Sequence[Project]:
    """Return projects in gallery order."""
    query = select(Project).order_by(*gallery_order())
    if not include_unpublished:
        query = query.where(Project.published.is_(True))
    result = await db.execute(query)
    return result.scalars().all()


async def next_project_order(db: AsyncSession) -> int:
    """Return the ``order`` value that appends a project to the gallery."""
    result = await db.execute(select(func.max(Project.order)))
    current = result.scalar_one_or_none()
    return 0 if current is None else current + 1


def serialize_project(project: Project) -> dict[str, object]:
    """JSON shape used by the admin API."""
    return {
        "id": project.id,
        "title": project.title,
        "description": project.description,
        "category": project.category,
        "image_url": project.image_url,
        "video_url": project.video_url,
        "extra_videos": project.extra_video_list(),
        "images": project.image_list(),
        "client_name": project.client_name,
        "source_url": project.source_url,
        "published": project.published,
        "order": project.order,
        "author_id": project.author_id,
        "created_at": project.created_at.isoformat() if project.created_at else None,
        "updated_at": project.updated_at.isoformat() if project.updated_at else None,
    }


def delete_project_media(project: Project) -> None:
    """Remove local upload files referenced by a project."""
    for url in (project.image_url, project.video_url):
        if delete_upload(url):
            logger.info("Deleted upload %s of project #%s", url, project.id)
