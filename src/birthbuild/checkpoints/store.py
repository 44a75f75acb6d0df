"""
Filesystem-backed checkpoint history.

Layout::

    <root>/<site_id>/checkpoints/v0001.json
    <root>/<site_id>/checkpoints/v0002.json
    <root>/<site_id>/live.json

Checkpoint files are write-once. Version assignment happens under a per-site
file lock so concurrent writers always produce a contiguous 1..N sequence.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import CheckpointError, CheckpointNotFoundError
from ..pipeline.generator import DesignSystem, GeneratedPage, GeneratedSite
from ..util.filesystem import ensure_directory, file_lock, read_json_file, write_text_file
from ..util.time import utc_now

logger = logging.getLogger(__name__)

_SITE_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_VERSION_FILE_RE = re.compile(r"^v(\d+)\.json$")

STATE_EMPTY = "no-checkpoint"
STATE_ACTIVE = "has-checkpoints"


class Checkpoint(BaseModel):
    """
    Immutable snapshot of one generated page set.

    Attributes:
        id: Opaque identifier, unique across sites.
        site_spec_id: Owning site.
        version: 1-based position in the site's history.
        pages: Generated documents in nav order.
        design_system: Shared chrome captured at generation time.
        llms_txt: Optional llms.txt body shipped with deploys.
        label: Human-readable note, e.g. "Initial build".
        created_at: UTC creation time.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    site_spec_id: str
    version: int = Field(ge=1)
    pages: List[GeneratedPage]
    design_system: Optional[DesignSystem] = None
    llms_txt: Optional[str] = None
    label: Optional[str] = None
    created_at: datetime

    @property
    def filenames(self) -> List[str]:
        return [page.filename for page in self.pages]

    def page(self, filename: str) -> Optional[GeneratedPage]:
        for page in self.pages:
            if page.filename == filename:
                return page
        return None


def validate_site_id(site_spec_id: str) -> str:
    if not site_spec_id or not _SITE_ID_RE.match(site_spec_id):
        raise CheckpointError(f"Invalid site id: {site_spec_id!r}")
    return site_spec_id


class CheckpointStore:
    """Append-only checkpoint persistence rooted at a data directory."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser().resolve()

    def site_dir(self, site_spec_id: str) -> Path:
        return self.root / validate_site_id(site_spec_id)

    def _checkpoint_dir(self, site_spec_id: str) -> Path:
        return self.site_dir(site_spec_id) / "checkpoints"

    def _version_path(self, site_spec_id: str, version: int) -> Path:
        return self._checkpoint_dir(site_spec_id) / f"v{version:04d}.json"

    def _version_numbers(self, site_spec_id: str) -> List[int]:
        directory = self._checkpoint_dir(site_spec_id)
        if not directory.exists():
            return []
        versions = []
        for entry in directory.iterdir():
            match = _VERSION_FILE_RE.match(entry.name)
            if match:
                versions.append(int(match.group(1)))
        return sorted(versions)

    def _read(self, path: Path) -> Checkpoint:
        try:
            payload = read_json_file(path)
        except (OSError, json.JSONDecodeError) as exc:
            raise CheckpointError(f"Unable to read checkpoint {path.name}: {exc}") from exc
        if payload is None:
            raise CheckpointNotFoundError(f"Checkpoint file missing: {path}")
        try:
            return Checkpoint.model_validate(payload)
        except ValidationError as exc:
            raise CheckpointError(f"Corrupt checkpoint {path.name}: {exc}") from exc

    def create(
        self,
        site_spec_id: str,
        pages: Iterable[GeneratedPage],
        design_system: Optional[DesignSystem] = None,
        label: Optional[str] = None,
        llms_txt: Optional[str] = None,
    ) -> Checkpoint:
        """
        Persist a new checkpoint with ``version = max + 1``.

        Raises:
            CheckpointError: If the page set is empty or the version file
                already exists.
        """
        page_list = list(pages)
        if not page_list:
            raise CheckpointError("Refusing to create a checkpoint without pages.")

        directory = ensure_directory(self._checkpoint_dir(site_spec_id))
        with file_lock(directory):
            versions = self._version_numbers(site_spec_id)
            version = (versions[-1] if versions else 0) + 1
            path = self._version_path(site_spec_id, version)
            if path.exists():
                raise CheckpointError(f"Checkpoint version {version} already exists for {site_spec_id}.")
            checkpoint = Checkpoint(
                id=uuid.uuid4().hex,
                site_spec_id=site_spec_id,
                version=version,
                pages=page_list,
                design_system=design_system,
                llms_txt=llms_txt,
                label=label,
                created_at=utc_now(),
            )
            write_text_file(path, checkpoint.model_dump_json(indent=2), lock=False)

        logger.info("Created checkpoint v%d (%s) for site %s", version, checkpoint.id, site_spec_id)
        return checkpoint

    def create_from_site(self, site_spec_id: str, site: GeneratedSite, label: Optional[str] = None) -> Checkpoint:
        return self.create(
            site_spec_id,
            site.pages,
            design_system=site.design_system,
            label=label,
            llms_txt=site.llms_txt or None,
        )

    def list(self, site_spec_id: str) -> List[Checkpoint]:
        """All checkpoints for a site, newest first."""
        return [
            self._read(self._version_path(site_spec_id, version))
            for version in reversed(self._version_numbers(site_spec_id))
        ]

    def latest(self, site_spec_id: str) -> Optional[Checkpoint]:
        versions = self._version_numbers(site_spec_id)
        if not versions:
            return None
        return self._read(self._version_path(site_spec_id, versions[-1]))

    def get_version(self, site_spec_id: str, version: int) -> Checkpoint:
        path = self._version_path(site_spec_id, version)
        if not path.exists():
            raise CheckpointNotFoundError(f"No checkpoint v{version} for site {site_spec_id}.")
        return self._read(path)

    def get(self, site_spec_id: str, checkpoint_id: str) -> Checkpoint:
        for checkpoint in self.list(site_spec_id):
            if checkpoint.id == checkpoint_id:
                return checkpoint
        raise CheckpointNotFoundError(f"Checkpoint {checkpoint_id} not found for site {site_spec_id}.")

    def state(self, site_spec_id: str) -> str:
        return STATE_ACTIVE if self._version_numbers(site_spec_id) else STATE_EMPTY
