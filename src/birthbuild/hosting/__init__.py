"""
Hosting collaborators: anything that can publish a file set.
"""

from .base import (
    MAX_FILES,
    RESERVED_SLUGS,
    Host,
    PublishReceipt,
    resolve_subdomain_slug,
    validate_files,
)
from .directory import DirectoryHost, ExportReport, export_files
from .netlify import NetlifyHost, build_zip

__all__ = [
    "MAX_FILES",
    "RESERVED_SLUGS",
    "Host",
    "PublishReceipt",
    "resolve_subdomain_slug",
    "validate_files",
    "DirectoryHost",
    "ExportReport",
    "export_files",
    "NetlifyHost",
    "build_zip",
]
