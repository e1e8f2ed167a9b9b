"""HTTP fetching for Behance pages.

Failures never raise: callers get a :class:`FetchFailure` and decide what
"no data" means for them.
"""

from __future__ import annotations

import logging

import httpx

from catso.behance.models import FetchFailure
from catso.config import config

logger = logging.getLogger("catso.behance")

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;"
        "q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9,es;q=0.8",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def build_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create a client carrying the browser-like headers."""
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else config.BEHANCE_TIMEOUT,
        follow_redirects=True,
        headers=BROWSER_HEADERS,
    )


async def fetch_html(
    url: str, *, client: httpx.AsyncClient | None = None
) -> str | FetchFailure:
    """Fetch ``url`` and return its body, or a failure marker.

    Args:
        url: Absolute https URL of a profile or project page
        client: Optional shared client; a short-lived one is used otherwise

    Returns:
        The response text on 2xx, otherwise a ``FetchFailure``
    """
    logger.debug("Fetching %s", url)

    try:
        if client is None:
            async with build_client() as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url, headers=BROWSER_HEADERS)
    except httpx.RequestError as exc:
        logger.warning("Failed to fetch %s: %s", url, exc)
        return FetchFailure(url=url, reason=str(exc) or type(exc).__name__)

    if not 200 <= response.status_code < 300:
        logger.warning("HTTP %s for %s", response.status_code, url)
        return FetchFailure(
            url=url,
            status_code=response.status_code,
            reason=f"HTTP {response.status_code}",
        )

    logger.debug("Fetched %s characters from %s", len(response.text), url)
    return response.text


__all__ = ["BROWSER_HEADERS", "build_client", "fetch_html"]
