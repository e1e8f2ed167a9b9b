"""Profile page parsing.

Behance ships its profile as minified HTML with JSON state embedded in it,
and the shape of that JSON changes without notice. Extraction is therefore
split into strategies that each return stubs or nothing; they run in
priority order and the first one that finds anything wins.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod

from catso.behance.models import (
    CATEGORY_COMMERCIAL,
    CATEGORY_VIDEOCLIPS,
    ProfileParseResult,
    ProjectStub,
    gallery_url,
)
from catso.behance.sanitize import sanitize_stubs

logger = logging.getLogger("catso.behance")

WINDOW_BEFORE = 1000
WINDOW_AFTER = 2000

COVER_SIZE_KEYS = ("original", "max_1200", "808", "max_808", "404", "405")
_SIZE_ALTERNATION = "|".join(COVER_SIZE_KEYS)

# gallery/123/slug or gallery/123, also with JSON-escaped slashes.
GALLERY_LINK_RE = re.compile(r"gallery\\?/(\d+)(?:\\?/([^\"'\\\s<>?#&]+))?")
NAME_FIELD_RE = re.compile(r'"name":"((?:[^"\\]|\\.)+)"')
TEXT_NODE_RE = re.compile(r">([^<]{5,50})<")
COVER_FIELD_RE = re.compile(rf'"({_SIZE_ALTERNATION})":"([^"]+)"')
COVER_CDN_RE = re.compile(
    rf"(?:https?:)?//[A-Za-z0-9.-]+/[^\"'\s<>()]*?/(?:{_SIZE_ALTERNATION})/"
    r"[^\"'\s<>()]+?\.(?:jpg|png|webp)",
    re.IGNORECASE,
)
ID_NAME_PAIR_RE = re.compile(r'"id":(\d+),"name":"((?:[^"\\]|\\.)*)"')


def _texts(pattern: re.Pattern[str], text: str) -> list[str]:
    """Stripped, non-blank first groups of every match of ``pattern``."""
    found = (match.group(1).strip() for match in pattern.finditer(text))
    return [value for value in found if value]


class ProfileStrategy(ABC):
    """One way of pulling project stubs out of profile HTML."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name used in logs and sync results."""

    @abstractmethod
    def extract(self, html: str) -> list[ProjectStub]:
        """Return raw stubs in discovery order, or an empty list."""


class GalleryLinkStrategy(ProfileStrategy):
    """Find ``gallery/<id>`` links and read title/cover from nearby markup.

    The search window around a link stops at the links of neighbouring
    projects. Markup after the link is searched first, then the markup
    before it, nearest first.
    """

    @property
    def name(self) -> str:
        return "gallery-link"

    def extract(self, html: str) -> list[ProjectStub]:
        seen: set[str] = set()
        stubs: list[ProjectStub] = []
        links = list(GALLERY_LINK_RE.finditer(html))

        for index, match in enumerate(links):
            external_id = match.group(1)
            if external_id in seen:
                continue
            seen.add(external_id)

            slug = (match.group(2) or "").replace("\\", "") or None
            before, after = self._window(html, links, index)

            stubs.append(
                ProjectStub(
                    external_id=external_id,
                    title=self._find_title(before, after, slug),
                    source_url=gallery_url(external_id, slug),
                    cover_url=self._find_cover(after) or self._find_cover(before),
                    suggested_category=CATEGORY_COMMERCIAL,
                    strategy=self.name,
                )
            )

        return stubs

    @staticmethod
    def _window(html: str, links: list[re.Match[str]], index: int) -> tuple[str, str]:
        match = links[index]
        external_id = match.group(1)
        start = max(0, match.start() - WINDOW_BEFORE)
        end = match.start() + WINDOW_AFTER

        for other in reversed(links[:index]):
            if other.group(1) != external_id:
                start = max(start, other.end())
                break
        for other in links[index + 1 :]:
            if other.group(1) != external_id:
                end = min(end, other.start())
                break

        return html[start : match.start()], html[match.start() : end]

    @staticmethod
    def _find_title(before: str, after: str, slug: str | None) -> str:
        for pattern in (NAME_FIELD_RE, TEXT_NODE_RE):
            texts_after = _texts(pattern, after)
            if texts_after:
                return texts_after[0]
            texts_before = _texts(pattern, before)
            if texts_before:
                return texts_before[-1]
        if slug:
            return slug.replace("-", " ")
        return ""

    @staticmethod
    def _find_cover(window: str) -> str | None:
        field = COVER_FIELD_RE.search(window)
        if field:
            return field.group(2).replace("\\", "")

        unescaped = window.replace("\\/", "/")
        cdn = COVER_CDN_RE.search(unescaped)
        if cdn:
            return cdn.group(0)
        return None


class JsonObjectStrategy(ProfileStrategy):
    """Fall back to bare ``"id":N,"name":"..."`` pairs in embedded JSON."""

    @property
    def name(self) -> str:
        return "json-object"

    def extract(self, html: str) -> list[ProjectStub]:
        seen: set[str] = set()
        stubs: list[ProjectStub] = []
        for match in ID_NAME_PAIR_RE.finditer(html):
            external_id = match.group(1)
            if external_id in seen:
                continue
            seen.add(external_id)
            stubs.append(
                ProjectStub(
                    external_id=external_id,
                    title=match.group(2),
                    source_url=gallery_url(external_id),
                    cover_url=None,
                    suggested_category=CATEGORY_VIDEOCLIPS,
                    strategy=self.name,
                )
            )
        return stubs


DEFAULT_STRATEGIES: tuple[ProfileStrategy, ...] = (
    GalleryLinkStrategy(),
    JsonObjectStrategy(),
)


def parse_profile(
    html: str,
    strategies: tuple[ProfileStrategy, ...] = DEFAULT_STRATEGIES,
) -> ProfileParseResult:
    """Extract project stubs from profile HTML.

    Strategies run in order and the first one yielding any candidate wins;
    its candidates are then sanitized, which may drop some or all of them.
    A miss is an empty result, never an exception.
    """
    if not html:
        return ProfileParseResult()

    for strategy in strategies:
        raw = strategy.extract(html)
        if not raw:
            logger.debug("Strategy %s found nothing", strategy.name)
            continue

        stubs = sanitize_stubs(raw)
        logger.info(
            "Profile parsed with strategy %s: %d candidate(s), %d usable",
            strategy.name,
            len(raw),
            len(stubs),
        )
        return ProfileParseResult(stubs=stubs, strategy=strategy.name)

    logger.warning("No profile strategy matched; page markup may have changed")
    return ProfileParseResult()


__all__ = [
    "DEFAULT_STRATEGIES",
    "GalleryLinkStrategy",
    "JsonObjectStrategy",
    "ProfileStrategy",
    "parse_profile",
]
