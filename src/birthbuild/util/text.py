"""
Text-related helpers.
"""

from __future__ import annotations

import hashlib
import re

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
_MAX_SLUG_LENGTH = 63


def slugify(value: str) -> str:
    """
    Generate a DNS- and filesystem-friendly slug.

    Uses hyphens as separators and caps the length at a single DNS label.
    """
    raw = (value or "").strip().lower()
    slug = _SLUG_PATTERN.sub("-", raw).strip("-")[:_MAX_SLUG_LENGTH].rstrip("-")
    if slug:
        return slug
    digest = hashlib.sha1(raw.encode("utf-8")).hexdigest()[:8]
    return f"site-{digest}"


def truncate_words(text: str, limit: int, *, suffix: str = "...") -> str:
    """
    Shorten text to at most `limit` characters, breaking on a word boundary.

    Whitespace is collapsed first. The suffix is only appended when something
    was cut and counts towards the limit. When even the first word does not
    fit, only the suffix is returned rather than a fragment of that word.
    """
    cleaned = " ".join((text or "").split())
    if len(cleaned) <= limit:
        return cleaned
    budget = max(limit - len(suffix), 0)
    head = cleaned[: budget + 1]
    boundary = head.rfind(" ")
    if boundary <= 0:
        return suffix[:limit]
    return head[:boundary].rstrip(" ,;:-") + suffix
