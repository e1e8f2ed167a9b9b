"""Database models for Catso."""

from catso.models.base import Base
from catso.models.category import Category
from catso.models.project import SYNC_DESCRIPTION_SENTINEL, Project
from catso.models.user import User

__all__ = [
    "Base",
    "Category",
    "Project",
    "SYNC_DESCRIPTION_SENTINEL",
    "User",
]
