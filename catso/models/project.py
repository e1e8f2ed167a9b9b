"""Project model."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catso.models.base import Base

if TYPE_CHECKING:
    from catso.models.user import User

# Description written by the Behance sync; rendered blank on the site.
SYNC_DESCRIPTION_SENTINEL = "Imported from Behance"


def _load_url_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (ValueError, TypeError):
        return []
    if isinstance(data, list):
        return [str(item).strip() for item in data if str(item).strip()]
    return []


class Project(Base):
    """Portfolio entry shown in the public gallery."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), index=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    video_url: Mapped[str | None] = mapped_column(
        String(2048), nullable=True, index=True
    )
    extra_videos: Mapped[str | None] = mapped_column(Text, nullable=True)
    images: Mapped[str | None] = mapped_column(Text, nullable=True)
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    source_url: Mapped[str | None] = mapped_column(
        String(2048), nullable=True, index=True
    )
    published: Mapped[bool] = mapped_column(Boolean, default=True)
    order: Mapped[int] = mapped_column(Integer, default=0, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    author_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    author: Mapped[User | None] = relationship("User", back_populates="projects")

    @property
    def display_description(self) -> str:
        """Description for the site, hiding the sync placeholder."""
        if not self.description or self.description == SYNC_DESCRIPTION_SENTINEL:
            return ""
        return self.description

    def extra_video_list(self) -> list[str]:
        """Return additional video URLs as a list."""
        return _load_url_list(self.extra_videos)

    def image_list(self) -> list[str]:
        """Return gallery image URLs as a list."""
        return _load_url_list(self.images)
