"""Data structures passed between the Behance fetcher, parsers and sync.

Profile HTML → ``ProjectStub`` list → per-stub ``ProjectDetail`` → ``Project``
row. Everything here is ephemeral; only the sync writes to the database.
"""

from __future__ import annotations

from dataclasses import dataclass, field

BEHANCE_BASE_URL = "https://www.behance.net"

CATEGORY_VIDEOCLIPS = "videoclips"
CATEGORY_COMMERCIAL = "commercial"


@dataclass
class ProjectStub:
    """A project discovered on a profile page, before any detail fetch."""

    external_id: str
    title: str
    source_url: str
    cover_url: str | None = None
    suggested_category: str = CATEGORY_COMMERCIAL
    strategy: str | None = None


@dataclass
class ProjectDetail:
    """What a project page tells us beyond the stub."""

    video_ref: str | None = None
    extra_videos: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FetchFailure:
    """Marker returned instead of HTML when a fetch did not succeed."""

    url: str
    status_code: int | None = None
    reason: str = ""

    def __bool__(self) -> bool:
        return False


@dataclass
class ProfileParseResult:
    """Stubs found on a profile and the strategy that found them."""

    stubs: list[ProjectStub] = field(default_factory=list)
    strategy: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.stubs


@dataclass
class SyncResult:
    """Summary of one sync pass."""

    imported_titles: list[str] = field(default_factory=list)
    skipped_titles: list[str] = field(default_factory=list)
    strategy: str | None = None

    @property
    def imported_count(self) -> int:
        return len(self.imported_titles)

    @property
    def message(self) -> str:
        if self.imported_count:
            return (
                f"Sync complete. {self.imported_count} new project(s) imported."
            )
        return (
            "Already up to date. No new projects found "
            f"({len(self.skipped_titles)} already exist)."
        )


def gallery_url(external_id: str, slug: str | None = None) -> str:
    """Canonical Behance project URL for an id and slug."""
    return f"{BEHANCE_BASE_URL}/gallery/{external_id}/{slug or 'project'}"


__all__ = [
    "BEHANCE_BASE_URL",
    "CATEGORY_COMMERCIAL",
    "CATEGORY_VIDEOCLIPS",
    "FetchFailure",
    "ProfileParseResult",
    "ProjectDetail",
    "ProjectStub",
    "SyncResult",
    "gallery_url",
]
