"""Cleanup applied to everything the profile strategies extract."""

from __future__ import annotations

import re
from collections.abc import Iterable

from catso.behance.models import ProjectStub

_UNICODE_ESCAPE_RE = re.compile(r"\\u([0-9a-fA-F]{4})")
_LIST_SEPARATOR_RE = re.compile(r"[\s,]+")

MIN_TITLE_LENGTH = 4

# Behance CDN hosts that show up without a scheme in embedded JSON.
_BARE_CDN_PREFIXES = ("mir-", "a.thumbs")


def decode_unicode_escapes(text: str) -> str:
    """Turn literal ``\\uXXXX`` sequences from embedded JSON into characters."""
    return _UNICODE_ESCAPE_RE.sub(lambda match: chr(int(match.group(1), 16)), text)


def clean_title(text: str) -> str:
    """Decode escapes, drop stray backslashes and trim whitespace."""
    decoded = decode_unicode_escapes(text)
    decoded = decoded.replace('\\"', '"').replace("\\/", "/")
    return " ".join(decoded.split())


def is_usable_title(title: str | None) -> bool:
    """Reject short titles and template/JSON fragments picked up by mistake."""
    if not title or len(title) < MIN_TITLE_LENGTH:
        return False
    return "{" not in title and "}" not in title


def normalize_cover_url(value: str | None) -> str | None:
    """Normalize a cover image reference into an absolute https URL.

    Handles srcset-like lists (first entry wins), protocol-relative URLs and
    bare CDN hosts without a scheme.
    """
    if not value:
        return None

    cleaned = value.replace("\\/", "/").replace("\\", "").strip()
    tokens = [token for token in _LIST_SEPARATOR_RE.split(cleaned) if token]
    if not tokens:
        return None

    url = tokens[0]
    if url.startswith("//"):
        return f"https:{url}"
    if url.startswith(_BARE_CDN_PREFIXES):
        return f"https://{url}"
    return url


def dedupe_stubs(stubs: Iterable[ProjectStub]) -> list[ProjectStub]:
    """Keep the first stub seen for each external id."""
    seen: set[str] = set()
    unique: list[ProjectStub] = []
    for stub in stubs:
        if stub.external_id in seen:
            continue
        seen.add(stub.external_id)
        unique.append(stub)
    return unique


def sanitize_stubs(stubs: Iterable[ProjectStub]) -> list[ProjectStub]:
    """Clean titles and covers, then drop unusable and duplicate stubs."""
    cleaned: list[ProjectStub] = []
    for stub in dedupe_stubs(stubs):
        title = clean_title(stub.title)
        if not is_usable_title(title):
            continue
        stub.title = title
        stub.cover_url = normalize_cover_url(stub.cover_url)
        cleaned.append(stub)
    return cleaned


__all__ = [
    "MIN_TITLE_LENGTH",
    "clean_title",
    "decode_unicode_escapes",
    "dedupe_stubs",
    "is_usable_title",
    "normalize_cover_url",
    "sanitize_stubs",
]
