"""
Shared utility helpers for filesystem, strings, and time calculations.
"""

from .filesystem import ensure_directory, file_lock, read_json_file, write_text_file
from .text import slugify, truncate_words
from .time import utc_now, today_iso

__all__ = [
    "ensure_directory",
    "file_lock",
    "read_json_file",
    "write_text_file",
    "slugify",
    "truncate_words",
    "utc_now",
    "today_iso",
]
