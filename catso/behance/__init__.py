"""Behance portfolio scraping and import.

Flow: :func:`sync_profile` fetches the profile (:mod:`.fetcher`), extracts
stubs (:mod:`.profile`), fetches each new project's page (:mod:`.detail`)
and stores the new projects.
"""

from catso.behance.detail import parse_project_detail, parse_video_ref
from catso.behance.errors import (
    BehanceSyncError,
    NoProjectsFoundError,
    ProfileUnavailableError,
    SyncInProgressError,
)
from catso.behance.fetcher import fetch_html
from catso.behance.models import (
    FetchFailure,
    ProfileParseResult,
    ProjectDetail,
    ProjectStub,
    SyncResult,
)
from catso.behance.profile import parse_profile
from catso.behance.sanitize import normalize_cover_url, sanitize_stubs
from catso.behance.sync import sync_profile

__all__ = [
    "BehanceSyncError",
    "FetchFailure",
    "NoProjectsFoundError",
    "ProfileParseResult",
    "ProfileUnavailableError",
    "ProjectDetail",
    "ProjectStub",
    "SyncInProgressError",
    "SyncResult",
    "fetch_html",
    "normalize_cover_url",
    "parse_profile",
    "parse_project_detail",
    "parse_video_ref",
    "sanitize_stubs",
    "sync_profile",
]
