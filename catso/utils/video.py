"""Detect the video platform behind a project URL and build its embed."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

_YOUTUBE_PATTERNS = (
    re.compile(
        r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)"
        r"([^\"&?/\s]{11})"
    ),
    re.compile(r"^([a-zA-Z0-9_-]{11})$"),
)
_VIMEO_RE = re.compile(r"vimeo\.com/(?:video/)?(\d+)", re.IGNORECASE)
_ADOBE_CCV_RE = re.compile(r"adobe\.io/v1/player/ccv/([a-zA-Z0-9_-]+)")
_DIRECT_VIDEO_RE = re.compile(r"\.(mp4|webm|mov|ogg|m4v|3gp|avi)($|\?|#)", re.IGNORECASE)
_BEHANCE_GALLERY_RE = re.compile(r"behance\.net/gallery/", re.IGNORECASE)


@dataclass(frozen=True)
class VideoEmbed:
    """How the project page should render a video."""

    kind: str  # youtube | vimeo | adobe | file
    src: str
    video_id: str | None = None


def get_youtube_id(url: str | None) -> str | None:
    """Return the 11-character YouTube id in ``url``, if any."""
    if not url:
        return None

    for pattern in _YOUTUBE_PATTERNS:
        match = pattern.search(url)
        if match and "{" not in match.group(1) and '"' not in match.group(1):
            return match.group(1)

    # youtu.be/<id>?si=... style links
    if "youtu.be/" in url:
        candidate = re.split(r"[?#&]", url.split("youtu.be/", 1)[1])[0]
        if len(candidate) == 11:
            return candidate

    return None


def get_vimeo_id(url: str | None) -> str | None:
    if not url:
        return None
    match = _VIMEO_RE.search(url)
    return match.group(1) if match else None


def get_adobe_ccv_id(url: str | None) -> str | None:
    if not url:
        return None
    match = _ADOBE_CCV_RE.search(url)
    return match.group(1) if match else None


def is_direct_video(url: str | None) -> bool:
    """Uploaded files, blobs and URLs ending in a video file extension."""
    if not url:
        return False
    return (
        url.startswith("/media/uploads/")
        or url.startswith("blob:")
        or bool(_DIRECT_VIDEO_RE.search(url))
    )


def is_behance_gallery(url: str | None) -> bool:
    """Behance project pages are links, not playable media."""
    return bool(url) and bool(_BEHANCE_GALLERY_RE.search(url))


def describe_video(url: str | None, *, autoplay: bool = False) -> VideoEmbed | None:
    """Pick the player for ``url``.

    Returns None for empty URLs, Behance gallery pages and anything that is
    not a known platform or a direct video file.
    """
    if not url or is_behance_gallery(url):
        return None

    if is_direct_video(url):
        return VideoEmbed(kind="file", src=quote(url, safe=":/?#&=%.-_~"))

    flag = "1" if autoplay else "0"

    youtube_id = get_youtube_id(url)
    if youtube_id and ("youtu" in url or len(url) == 11):
        return VideoEmbed(
            kind="youtube",
            src=(
                f"https://www.youtube-nocookie.com/embed/{youtube_id}"
                f"?autoplay={flag}&rel=0&modestbranding=1"
            ),
            video_id=youtube_id,
        )

    vimeo_id = get_vimeo_id(url)
    if vimeo_id:
        return VideoEmbed(
            kind="vimeo",
            src=f"https://player.vimeo.com/video/{vimeo_id}?autoplay={flag}&title=0",
            video_id=vimeo_id,
        )

    ccv_id = get_adobe_ccv_id(url)
    if ccv_id:
        src = url if url.startswith("http") else f"https://www-ccv.{url.lstrip('/')}"
        return VideoEmbed(kind="adobe", src=src, video_id=ccv_id)

    return None


def youtube_thumbnail(url: str | None) -> str | None:
    """Poster image for a YouTube video."""
    video_id = get_youtube_id(url)
    if not video_id:
        return None
    return f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"
