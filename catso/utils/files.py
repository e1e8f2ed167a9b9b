"""Upload storage for project media."""

import logging
import re
import uuid
from datetime import UTC, datetime
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from catso.config import config

logger = logging.getLogger("catso.uploads")

UPLOAD_SUBDIR = "uploads"
UPLOAD_URL_PREFIX = f"/media/{UPLOAD_SUBDIR}/"
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}


def generate_unique_filename(original_filename: str) -> str:
    """Generate a unique filename to prevent overwrites.

    Args:
        original_filename: Original filename from upload

    Returns:
        Unique filename with timestamp, short UUID and a sanitized stem
    """
    path = Path(original_filename)
    ext = path.suffix.lower()
    stem = re.sub(r"[^A-Za-z0-9_-]+", "-", path.stem).strip("-")[:40]

    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]

    if stem:
        return f"{timestamp}_{short_uuid}_{stem}{ext}"
    return f"{timestamp}_{short_uuid}{ext}"


def upload_dir() -> Path:
    return config.MEDIA_ROOT / UPLOAD_SUBDIR


def get_upload_url(filename: str) -> str:
    """Public URL of an uploaded file."""
    return f"{UPLOAD_URL_PREFIX}{filename}"


def get_thumbnail_url(filename: str) -> str:
    """Public URL of an uploaded image's thumbnail."""
    return f"/media/thumbnails/{UPLOAD_SUBDIR}/thumb_{Path(filename).stem}.jpg"


def is_local_upload(url: str | None) -> bool:
    """Whether ``url`` points at a file stored by :func:`save_upload`."""
    return bool(url) and url.startswith(UPLOAD_URL_PREFIX)


async def save_upload(upload_file: UploadFile) -> str:
    """Store an uploaded file and return its public URL.

    Image uploads also get a thumbnail; a file Pillow cannot read is kept
    without one.
    """
    if not upload_file.filename:
        raise ValueError("No filename provided")

    filename = generate_unique_filename(upload_file.filename)
    target_dir = upload_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    file_path = target_dir / filename
    file_path.write_bytes(await upload_file.read())

    if file_path.suffix.lower() in IMAGE_EXTENSIONS:
        try:
            create_thumbnail(file_path)
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Could not create thumbnail for %s: %s", filename, exc)

    return get_upload_url(filename)


def create_thumbnail(source_path: Path, max_size: tuple[int, int] = (480, 480)) -> str:
    """Create a JPEG thumbnail next to the uploads and return its filename."""
    with Image.open(source_path) as img:
        if img.mode in ("RGBA", "LA", "P"):
            background = Image.new("RGB", img.size, (0, 0, 0))
            if img.mode == "P":
                img = img.convert("RGBA")
            background.paste(img, mask=img.split()[-1] if img.mode == "RGBA" else None)
            img = background
        elif img.mode != "RGB":
            img = img.convert("RGB")

        img.thumbnail(max_size, Image.Resampling.LANCZOS)

        thumbnail_name = f"thumb_{source_path.stem}.jpg"
        thumb_dir = config.MEDIA_ROOT / "thumbnails" / UPLOAD_SUBDIR
        thumb_dir.mkdir(parents=True, exist_ok=True)
        img.save(thumb_dir / thumbnail_name, "JPEG", quality=85, optimize=True)

    return thumbnail_name


def thumbnail_for(url: str | None) -> str | None:
    """Thumbnail URL for a local image upload, ``url`` itself otherwise."""
    if not url or not is_local_upload(url):
        return url
    filename = url.removeprefix(UPLOAD_URL_PREFIX)
    thumb_path = (
        config.MEDIA_ROOT / "thumbnails" / UPLOAD_SUBDIR / f"thumb_{Path(filename).stem}.jpg"
    )
    if thumb_path.exists():
        return get_thumbnail_url(filename)
    return url


def delete_upload(url: str | None) -> bool:
    """Delete a local upload and its thumbnail; other URLs are ignored."""
    if not url or not is_local_upload(url):
        return False

    filename = url.removeprefix(UPLOAD_URL_PREFIX)
    if "/" in filename or filename in {"", ".", ".."}:
        return False

    deleted = False
    file_path = upload_dir() / filename
    if file_path.exists():
        file_path.unlink()
        deleted = True

    thumb_path = (
        config.MEDIA_ROOT / "thumbnails" / UPLOAD_SUBDIR / f"thumb_{Path(filename).stem}.jpg"
    )
    if thumb_path.exists():
        thumb_path.unlink()

    return deleted
