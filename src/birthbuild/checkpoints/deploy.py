"""
Deploy and rollback of stored checkpoints.

Any checkpoint can be deployed; deploying an older one is a rollback and
leaves newer checkpoints in place. The live pointer only moves after the host
reports success.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from filelock import Timeout
from pydantic import BaseModel, ConfigDict, ValidationError

from ..config.settings import DEFAULT_BASE_DOMAIN
from ..errors import CheckpointError, CheckpointNotFoundError, DeployInProgressError, HostingError
from ..hosting.base import Host, resolve_subdomain_slug
from ..seo.files import generate_robots_txt, generate_sitemap
from ..util.filesystem import ensure_directory, file_lock, read_json_file, write_text_file
from ..util.time import utc_now
from .store import Checkpoint, CheckpointStore

logger = logging.getLogger(__name__)

LIVE_FILENAME = "live.json"
DEPLOY_LOCK_NAME = "deploy"


class LiveState(BaseModel):
    """Which checkpoint a site currently serves."""

    model_config = ConfigDict(frozen=True)

    site_spec_id: str
    checkpoint_id: str
    version: int
    deploy_url: str
    deployed_at: datetime
    provider_site_id: Optional[str] = None


@dataclass(frozen=True)
class DeployResult:
    success: bool
    checkpoint_id: str
    version: int
    deploy_url: Optional[str] = None
    error: Optional[str] = None


def live_path(store: CheckpointStore, site_spec_id: str) -> Path:
    return store.site_dir(site_spec_id) / LIVE_FILENAME


def read_live_state(store: CheckpointStore, site_spec_id: str) -> Optional[LiveState]:
    """The live pointer for a site, or None if it was never deployed."""
    path = live_path(store, site_spec_id)
    try:
        payload = read_json_file(path)
    except (OSError, json.JSONDecodeError) as exc:
        raise CheckpointError(f"Unable to read live pointer for {site_spec_id}: {exc}") from exc
    if payload is None:
        return None
    try:
        return LiveState.model_validate(payload)
    except ValidationError as exc:
        raise CheckpointError(f"Corrupt live pointer for {site_spec_id}: {exc}") from exc


def build_deploy_files(checkpoint: Checkpoint, base_url: str) -> Dict[str, str]:
    """
    Files shipped for a checkpoint: its pages, sitemap.xml, robots.txt and,
    when stored with it, llms.txt.
    """
    files = {page.filename: page.html for page in checkpoint.pages}
    files["sitemap.xml"] = generate_sitemap(checkpoint.filenames, base_url)
    files["robots.txt"] = generate_robots_txt(base_url)
    if checkpoint.llms_txt:
        files["llms.txt"] = checkpoint.llms_txt
    return files


class DeployController:
    """
    Pushes checkpoints to a host, one deploy per site at a time.

    A second deploy for a site that already has one in flight is rejected
    with `DeployInProgressError` rather than queued.
    """

    def __init__(self, store: CheckpointStore, host: Host, *, base_domain: str = DEFAULT_BASE_DOMAIN) -> None:
        self.store = store
        self.host = host
        self.base_domain = base_domain

    def _live_path(self, site_spec_id: str) -> Path:
        return live_path(self.store, site_spec_id)

    def live(self, site_spec_id: str) -> Optional[LiveState]:
        return read_live_state(self.store, site_spec_id)

    def deploy(self, site_spec_id: str, checkpoint_id: str, *, site_slug: Optional[str] = None) -> DeployResult:
        """
        Publish a checkpoint and move the live pointer to it.

        Host failures are returned as ``DeployResult(success=False)`` with the
        pointer untouched.

        Raises:
            DeployInProgressError: If another deploy holds the site's lock.
            CheckpointNotFoundError: If the checkpoint does not exist.
        """
        site_dir = ensure_directory(self.store.site_dir(site_spec_id))
        try:
            with file_lock(site_dir / DEPLOY_LOCK_NAME, timeout=0):
                return self._deploy_locked(site_spec_id, checkpoint_id, site_slug)
        except Timeout as exc:
            raise DeployInProgressError(site_spec_id) from exc

    def redeploy_latest(self, site_spec_id: str, *, site_slug: Optional[str] = None) -> DeployResult:
        latest = self.store.latest(site_spec_id)
        if latest is None:
            raise CheckpointNotFoundError(f"Site {site_spec_id} has no checkpoints to deploy.")
        return self.deploy(site_spec_id, latest.id, site_slug=site_slug)

    def _deploy_locked(self, site_spec_id: str, checkpoint_id: str, site_slug: Optional[str]) -> DeployResult:
        checkpoint = self.store.get(site_spec_id, checkpoint_id)
        previous = self.live(site_spec_id)
        slug = resolve_subdomain_slug(site_spec_id, site_slug)
        base_url = f"https://{slug}.{self.base_domain}"
        files = build_deploy_files(checkpoint, base_url)

        logger.info("Deploying v%d of %s (%d files)", checkpoint.version, site_spec_id, len(files))
        try:
            receipt = self.host.publish(
                site_spec_id,
                files,
                site_slug=slug,
                provider_site_id=previous.provider_site_id if previous else None,
            )
        except (HostingError, TimeoutError) as exc:
            logger.error("Deploy of v%d for %s failed: %s", checkpoint.version, site_spec_id, exc)
            return DeployResult(
                success=False,
                checkpoint_id=checkpoint.id,
                version=checkpoint.version,
                error=str(exc),
            )

        state = LiveState(
            site_spec_id=site_spec_id,
            checkpoint_id=checkpoint.id,
            version=checkpoint.version,
            deploy_url=receipt.url,
            deployed_at=utc_now(),
            provider_site_id=receipt.provider_site_id,
        )
        write_text_file(self._live_path(site_spec_id), state.model_dump_json(indent=2))
        logger.info("Site %s now serves v%d at %s", site_spec_id, checkpoint.version, receipt.url)
        return DeployResult(
            success=True,
            checkpoint_id=checkpoint.id,
            version=checkpoint.version,
            deploy_url=receipt.url,
        )
