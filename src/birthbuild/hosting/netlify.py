"""
Netlify deploy API client.
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import Any, Mapping, Optional

import requests

from ..config.settings import DEFAULT_BASE_DOMAIN
from ..errors import HostingError
from ..util.http import format_request_exception
from .base import PublishReceipt, resolve_subdomain_slug, validate_files

logger = logging.getLogger(__name__)

NETLIFY_API_BASE = "https://api.netlify.com/api/v1"
MAX_ZIP_BYTES = 50 * 1024 * 1024
SITE_NAME_PREFIX = "birthbuild-"


def build_zip(files: Mapping[str, str]) -> bytes:
    """Pack files into an uncompressed (stored) zip archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_STORED) as archive:
        for path in sorted(files):
            archive.writestr(path, files[path].encode("utf-8"))
    payload = buffer.getvalue()
    if len(payload) > MAX_ZIP_BYTES:
        raise HostingError("Generated site exceeds maximum size limit.")
    return payload


class NetlifyHost:
    """
    Publishes sites through the Netlify deploy API.

    The Netlify site is created on first publish (named ``birthbuild-<slug>``
    with ``<slug>.<base_domain>`` as custom domain); later publishes reuse the
    provider site id handed back in the receipt.
    """

    def __init__(
        self,
        token: str,
        *,
        base_domain: str = DEFAULT_BASE_DOMAIN,
        timeout: float = 60.0,
        api_base: str = NETLIFY_API_BASE,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not token:
            raise HostingError("NETLIFY_API_TOKEN is not set.")
        self.base_domain = base_domain
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")
        self.session = session or requests.Session()
        self._token = token

    def _headers(self, content_type: str) -> dict:
        return {"Authorization": f"Bearer {self._token}", "Content-Type": content_type}

    def _post(self, path: str, *, description: str, **kwargs: Any) -> dict:
        url = f"{self.api_base}{path}"
        try:
            response = self.session.post(url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise HostingError(f"Netlify {description} failed: {format_request_exception(exc)}") from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise HostingError(f"Netlify {description} returned invalid JSON.") from exc
        if not isinstance(data, dict):
            raise HostingError(f"Netlify {description} returned an unexpected payload.")
        return data

    def create_site(self, slug: str) -> str:
        data = self._post(
            "/sites",
            description="site creation",
            json={"name": f"{SITE_NAME_PREFIX}{slug}", "custom_domain": f"{slug}.{self.base_domain}"},
            headers=self._headers("application/json"),
        )
        site_id = data.get("id")
        if not site_id:
            raise HostingError("Netlify site creation returned no site id.")
        logger.info("Created Netlify site %s for %s", site_id, slug)
        return str(site_id)

    def publish(
        self,
        site_id: str,
        files: Mapping[str, str],
        *,
        site_slug: Optional[str] = None,
        provider_site_id: Optional[str] = None,
    ) -> PublishReceipt:
        validate_files(files)
        slug = resolve_subdomain_slug(site_id, site_slug)
        archive = build_zip(files)
        netlify_site_id = provider_site_id or self.create_site(slug)

        data = self._post(
            f"/sites/{netlify_site_id}/deploys",
            description="deploy",
            data=archive,
            headers=self._headers("application/zip"),
        )
        deploy_id = data.get("id")
        logger.info("Netlify deploy %s accepted for site %s", deploy_id, site_id)
        return PublishReceipt(
            url=f"https://{slug}.{self.base_domain}",
            deploy_id=str(deploy_id) if deploy_id else None,
            provider_site_id=netlify_site_id,
        )
