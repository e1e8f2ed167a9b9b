"""Category helpers."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catso.models import Category, Project

_WHITESPACE_RE = re.compile(r"\s+")


def slugify_category(value: str) -> str:
    """``"Music Videos "`` -> ``"music-videos"``."""
    return _WHITESPACE_RE.sub("-", value.strip().lower())


async def list_categories(db: AsyncSession) -> Sequence[Category]:
    result = await db.execute(
        select(Category).order_by(Category.order.asc(), Category.id.asc())
    )
    return result.scalars().all()


async def get_category_by_name(db: AsyncSession, name: str) -> Category | None:
    result = await db.execute(select(Category).where(Category.name == name))
    return result.scalar_one_or_none()


@dataclass
class GallerySection:
    """A category and its projects as shown on the home page."""

    name: str
    title: str
    description: str | None = None
    projects: list[Project] = field(default_factory=list)


def group_projects(
    categories: Sequence[Category], projects: Sequence[Project]
) -> list[GallerySection]:
    """Group projects (already in gallery order) under their categories.

    Projects whose category has no row get a trailing section of their own;
    empty sections are dropped.
    """
    sections: dict[str, GallerySection] = {
        category.name: GallerySection(
            name=category.name,
            title=category.display_title,
            description=category.description,
        )
        for category in categories
    }

    for project in projects:
        section = sections.get(project.category)
        if section is None:
            section = GallerySection(
                name=project.category,
                title=project.category.replace("-", " ").title(),
            )
            sections[project.category] = section
        section.projects.append(project)

    return [section for section in sections.values() if section.projects]
