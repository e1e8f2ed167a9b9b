"""CLI tool for Catso."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys

from sqlalchemy import select

from catso.behance import BehanceSyncError, sync_profile
from catso.config import config
from catso.database import AsyncSessionLocal, init_db
from catso.logging_config import configure_logging
from catso.models import User
from catso.services.projects import list_projects as query_projects
from catso.utils.auth import get_password_hash, get_user_by_email


async def upsert_user(email: str, password: str, *, is_admin: bool = False) -> None:
    """Create or update a user with the given credentials."""
    await init_db()
    async with AsyncSessionLocal() as session:
        user = await get_user_by_email(session, email)
        hashed = get_password_hash(password)

        if user:
            user.hashed_password = hashed
            user.is_active = True
            if is_admin:
                user.is_admin = True
            await session.commit()
            print(f"Updated password for existing user {email}")
            return

        new_user = User(
            email=email, hashed_password=hashed, is_active=True, is_admin=is_admin
        )
        session.add(new_user)
        await session.commit()
        print(f"Created {'admin' if is_admin else 'user'} {email}")


async def list_users() -> None:
    """List all users."""
    await init_db()
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).order_by(User.id))
        for user in result.scalars().all():
            print(
                f"ID: {user.id}, Email: {user.email}, "
                f"Active: {user.is_active}, Admin: {user.is_admin}"
            )


async def delete_user(email: str) -> None:
    """Delete a user."""
    await init_db()
    async with AsyncSessionLocal() as session:
        user = await get_user_by_email(session, email)
        if not user:
            print(f"User {email} not found.", file=sys.stderr)
            return
        await session.delete(user)
        await session.commit()
        print(f"Deleted user {email}")


async def list_projects() -> None:
    """List every project in gallery order."""
    await init_db()
    async with AsyncSessionLocal() as session:
        for project in await query_projects(session, include_unpublished=True):
            state = "published" if project.published else "draft"
            print(
                f"ID: {project.id}, Order: {project.order}, "
                f"Category: {project.category}, {state}: {project.title}"
            )


async def behance_sync(profile_url: str) -> int:
    """Run one Behance import pass and return the exit code."""
    await init_db()
    async with AsyncSessionLocal() as session:
        try:
            result = await sync_profile(session, profile_url)
        except BehanceSyncError as exc:
            print(f"Sync failed: {exc}", file=sys.stderr)
            return 1

    print(result.message)
    for title in result.imported_titles:
        print(f"  + {title}")
    return 0


def prompt_password(confirm: bool = True) -> str:
    """Prompt for a password."""
    first = getpass.getpass("Password: ")
    if not confirm:
        return first

    second = getpass.getpass("Confirm password: ")
    if first != second:
        print("Passwords do not match.", file=sys.stderr)
        sys.exit(1)
    if not first:
        print("Password cannot be empty.", file=sys.stderr)
        sys.exit(1)
    return first


def main() -> None:
    parser = argparse.ArgumentParser(description="Catso CLI tool.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # User management
    user_parser = subparsers.add_parser("user", help="Manage users")
    user_subparsers = user_parser.add_subparsers(dest="user_command", required=True)

    create_parser = user_subparsers.add_parser("create", help="Create or update a user")
    create_parser.add_argument("--email", required=True, help="User email")
    create_parser.add_argument("--password", help="Password (omit to prompt)")
    create_parser.add_argument(
        "--admin", action="store_true", help="Grant admin rights"
    )

    user_subparsers.add_parser("list", help="List all users")

    delete_parser = user_subparsers.add_parser("delete", help="Delete a user")
    delete_parser.add_argument("--email", required=True, help="User email")

    # Behance import
    behance_parser = subparsers.add_parser("behance", help="Behance import")
    behance_subparsers = behance_parser.add_subparsers(
        dest="behance_command", required=True
    )
    sync_parser = behance_subparsers.add_parser(
        "sync", help="Import new projects from the Behance profile"
    )
    sync_parser.add_argument(
        "--profile-url",
        default=config.BEHANCE_PROFILE_URL,
        help="Behance profile URL",
    )

    # Projects
    projects_parser = subparsers.add_parser("projects", help="Inspect projects")
    projects_subparsers = projects_parser.add_subparsers(
        dest="projects_command", required=True
    )
    projects_subparsers.add_parser("list", help="List projects")

    args = parser.parse_args()

    if args.command == "user":
        if args.user_command == "create":
            password = args.password or prompt_password(confirm=True)
            asyncio.run(upsert_user(args.email, password, is_admin=args.admin))
        elif args.user_command == "list":
            asyncio.run(list_users())
        elif args.user_command == "delete":
            asyncio.run(delete_user(args.email))

    elif args.command == "behance":
        configure_logging(debug=config.DEBUG)
        sys.exit(asyncio.run(behance_sync(args.profile_url)))

    elif args.command == "projects":
        asyncio.run(list_projects())


if __name__ == "__main__":
    main()
