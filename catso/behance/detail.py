"""Project page parsing: embedded videos and gallery images."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from catso.behance.models import ProjectDetail

logger = logging.getLogger("catso.behance")

_SLASH = r"(?:\\/|/)"
# Loose id capture: template placeholders such as {{video_id}} match here and
# are then rejected by _is_placeholder_id.
_ID_CHAR = r"[^\"'&?/\\\s<>]"

YOUTUBE_EMBED_RE = re.compile(
    rf"youtube\.com{_SLASH}embed{_SLASH}({_ID_CHAR}{{11}})"
)
YOUTUBE_SHORT_RE = re.compile(rf"youtu\.be{_SLASH}({_ID_CHAR}{{11}})")
VIMEO_EMBED_RE = re.compile(
    rf"vimeo\.com{_SLASH}video{_SLASH}(\{{{_ID_CHAR}*|\d{{5,15}})"
)

PROJECT_IMAGE_RE = re.compile(
    r"https?://[^\"'\s<>]+\.behance\.net/project_modules/"
    r"(?:fs|max_1200|1400|disp|source)/[^\"'\s<>]+?\.(?:jpg|jpeg|png|webp)",
    re.IGNORECASE,
)


def _youtube_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def _vimeo_url(video_id: str) -> str:
    return f"https://vimeo.com/{video_id}"


# Priority order for the primary video.
VIDEO_PATTERNS = (
    (YOUTUBE_EMBED_RE, _youtube_url),
    (YOUTUBE_SHORT_RE, _youtube_url),
    (VIMEO_EMBED_RE, _vimeo_url),
)


def _is_placeholder_id(video_id: str) -> bool:
    return "{" in video_id


def parse_video_ref(html: str | None) -> str | None:
    """Return a player-loadable URL for the first embedded video, if any.

    Only the first match of each pattern is considered; a placeholder id
    (template braces) makes the parser move on to the next pattern.
    """
    if not html:
        return None

    for pattern, build_url in VIDEO_PATTERNS:
        match = pattern.search(html)
        if match is None:
            continue
        video_id = match.group(1)
        if _is_placeholder_id(video_id):
            logger.debug("Ignoring placeholder video id %r", video_id)
            continue
        return build_url(video_id)

    return None


def find_all_videos(html: str) -> list[str]:
    """Return every distinct YouTube/Vimeo URL in the page, in pattern order."""
    found: list[str] = []
    for pattern, build_url in VIDEO_PATTERNS:
        for match in pattern.finditer(html):
            video_id = match.group(1)
            if _is_placeholder_id(video_id):
                continue
            url = build_url(video_id)
            if url not in found:
                found.append(url)
    return found


def find_project_images(html: str) -> list[str]:
    """Collect Behance ``project_modules`` images from tags and inline JSON."""
    candidates: list[str] = []

    soup = BeautifulSoup(html, "html.parser")
    for img in soup.find_all("img"):
        for attr in ("src", "data-src", "srcset"):
            value = img.get(attr)
            if not value:
                continue
            if isinstance(value, list):
                value = " ".join(value)
            candidates.extend(
                match.group(0) for match in PROJECT_IMAGE_RE.finditer(value)
            )

    unescaped = html.replace("\\/", "/")
    candidates.extend(match.group(0) for match in PROJECT_IMAGE_RE.finditer(unescaped))

    images: list[str] = []
    for url in candidates:
        if url not in images:
            images.append(url)
    return images


def parse_project_detail(html: str | None) -> ProjectDetail:
    """Parse a project page into its primary video, extra videos and images."""
    if not html:
        return ProjectDetail()

    video_ref = parse_video_ref(html)
    extra_videos = [url for url in find_all_videos(html) if url != video_ref]
    images = find_project_images(html)

    if video_ref:
        logger.debug(
            "Found video %s (+%d extra), %d image(s)",
            video_ref,
            len(extra_videos),
            len(images),
        )
    else:
        logger.debug("No embedded video found, %d image(s)", len(images))

    return ProjectDetail(video_ref=video_ref, extra_videos=extra_videos, images=images)


__all__ = [
    "find_all_videos",
    "find_project_images",
    "parse_project_detail",
    "parse_video_ref",
]
