"""
Hosting collaborator interface and publish-time file validation.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from ..errors import HostingError
from ..util.text import slugify

MAX_FILES = 50
MAX_FILE_BYTES = 5 * 1024 * 1024
MAX_PATH_LENGTH = 100
SAFE_PATH_RE = re.compile(r"^[a-zA-Z0-9_\-][a-zA-Z0-9_\-/]*\.(html|xml|txt|css|js|json|ico|svg|webmanifest)$")
RESERVED_SLUGS = frozenset({"www", "api", "app", "admin", "mail", "ftp", "cdn", "assets", "static", "birthbuild"})


@dataclass(frozen=True)
class PublishReceipt:
    """
    Outcome of a successful publish.

    Attributes:
        url: Public URL of the deployed site.
        deploy_id: Provider-side deploy identifier, when there is one.
        provider_site_id: Provider-side site identifier to reuse next time.
    """

    url: str
    deploy_id: Optional[str] = None
    provider_site_id: Optional[str] = None


class Host(Protocol):
    def publish(
        self,
        site_id: str,
        files: Mapping[str, str],
        *,
        site_slug: Optional[str] = None,
        provider_site_id: Optional[str] = None,
    ) -> PublishReceipt:
        """Publish the complete file set, replacing whatever was live. Raises HostingError."""
        ...


def validate_files(files: Mapping[str, str]) -> None:
    """
    Reject file sets a static host should never receive.

    Raises:
        HostingError: On too many files, unsafe paths, or oversized content.
    """
    if not files:
        raise HostingError("No files to publish.")
    if len(files) > MAX_FILES:
        raise HostingError(f"Too many files ({len(files)}); the limit is {MAX_FILES}.")
    for path, content in files.items():
        if (
            len(path) > MAX_PATH_LENGTH
            or ".." in path
            or path.startswith("/")
            or not SAFE_PATH_RE.match(path)
        ):
            raise HostingError(f'Invalid file path: "{path}".')
        if len(content.encode("utf-8")) > MAX_FILE_BYTES:
            raise HostingError(f'File "{path}" exceeds maximum size.')


def resolve_subdomain_slug(site_id: str, preferred: Optional[str] = None) -> str:
    """
    Subdomain label for a site; reserved names get a stable suffix.
    """
    slug = slugify(preferred or site_id)
    if slug in RESERVED_SLUGS:
        suffix = hashlib.sha1(site_id.encode("utf-8")).hexdigest()[:4]
        slug = f"{slug}-{suffix}"
    return slug
