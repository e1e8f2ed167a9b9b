"""Exceptions raised by the Behance sync."""

from __future__ import annotations


class BehanceSyncError(Exception):
    """Base class for sync failures reported to the caller."""

    def __init__(self, message: str, profile_url: str | None = None) -> None:
        super().__init__(message)
        self.profile_url = profile_url


class ProfileUnavailableError(BehanceSyncError):
    """The profile page could not be fetched."""

    def __init__(
        self,
        message: str,
        profile_url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, profile_url=profile_url)
        self.status_code = status_code


class NoProjectsFoundError(BehanceSyncError):
    """The profile page was fetched but no strategy found any project."""


class SyncInProgressError(BehanceSyncError):
    """Another sync pass is already running in this process."""


__all__ = [
    "BehanceSyncError",
    "NoProjectsFoundError",
    "ProfileUnavailableError",
    "SyncInProgressError",
]
