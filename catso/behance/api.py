"""Optional project listing through the Behance v2 API.

Only used when ``BEHANCE_API_KEY`` is configured. Any failure returns an
empty list so the caller falls back to HTML scraping.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from catso.behance.models import BEHANCE_BASE_URL, CATEGORY_COMMERCIAL, ProjectStub
from catso.behance.sanitize import sanitize_stubs

logger = logging.getLogger("catso.behance")

STRATEGY_NAME = "api"

_RESERVED_PATHS = {"search", "gallery", "for_you", "misc", "blog", "jobs"}
_USERNAME_RE = re.compile(r"behance\.net/([^/?#]+)")
_COVER_PREFERENCE = ("404", "original", "max_808", "808", "max_1200", "405")


def extract_username(profile_url: str) -> str | None:
    """Return the Behance username from a profile URL."""
    match = _USERNAME_RE.search(profile_url)
    if not match:
        return None
    name = match.group(1)
    if name in _RESERVED_PATHS:
        return None
    return name


def _pick_cover(covers: Any) -> str | None:
    if not isinstance(covers, dict) or not covers:
        return None
    for key in _COVER_PREFERENCE:
        if covers.get(key):
            return str(covers[key])
    first = next(iter(covers.values()))
    return str(first) if first else None


def stubs_from_api_payload(payload: Any) -> list[ProjectStub]:
    """Convert a ``/v2/users/<name>/projects`` response into stubs."""
    if not isinstance(payload, dict):
        return []
    projects = payload.get("projects")
    if not isinstance(projects, list):
        return []

    stubs: list[ProjectStub] = []
    for item in projects:
        if not isinstance(item, dict) or item.get("id") is None:
            continue
        external_id = str(item["id"])
        stubs.append(
            ProjectStub(
                external_id=external_id,
                title=str(item.get("name") or ""),
                source_url=str(
                    item.get("url") or f"{BEHANCE_BASE_URL}/gallery/{external_id}"
                ),
                cover_url=_pick_cover(item.get("covers")),
                suggested_category=CATEGORY_COMMERCIAL,
                strategy=STRATEGY_NAME,
            )
        )
    return sanitize_stubs(stubs)


async def fetch_api_stubs(
    profile_url: str,
    api_key: str,
    *,
    client: httpx.AsyncClient,
) -> list[ProjectStub]:
    """List a profile's projects through the API, or return ``[]``."""
    username = extract_username(profile_url)
    if not username:
        logger.debug("No Behance username in %s; skipping API", profile_url)
        return []

    api_url = f"{BEHANCE_BASE_URL}/v2/users/{username}/projects"
    logger.info("Querying Behance API for %s", username)
    try:
        response = await client.get(api_url, params={"api_key": api_key})
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "Behance API returned HTTP %s; falling back to HTML",
            exc.response.status_code,
        )
        return []
    except (httpx.RequestError, ValueError) as exc:
        logger.warning("Behance API request failed (%s); falling back to HTML", exc)
        return []

    stubs = stubs_from_api_payload(payload)
    logger.info("Behance API returned %d project(s)", len(stubs))
    return stubs


__all__ = [
    "STRATEGY_NAME",
    "extract_username",
    "fetch_api_stubs",
    "stubs_from_api_payload",
]
