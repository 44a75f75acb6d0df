"""
Time helpers used for checkpoint stamps and sitemap dates.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def today_iso() -> str:
    """Return today's UTC date as YYYY-MM-DD."""
    return utc_now().date().isoformat()
