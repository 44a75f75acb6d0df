"""
Local directory host: publishes a site as plain files on disk.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from ..errors import HostingError
from ..util.filesystem import ensure_directory, file_lock, is_relative_to, write_text_file
from .base import PublishReceipt, validate_files

logger = logging.getLogger(__name__)


@dataclass
class ExportReport:
    """
    What a directory publish wrote.

    Attributes:
        root: Directory now holding the live files.
        files_written: Files written, relative to root.
        replaced_previous: True if an earlier publish was swapped out.
    """

    root: Path
    files_written: List[str] = field(default_factory=list)
    replaced_previous: bool = False

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Root", str(self.root))
        yield ("Files written", str(len(self.files_written)))
        yield ("Replaced previous", "yes" if self.replaced_previous else "no")


def export_files(destination: Path | str, files: Mapping[str, str]) -> ExportReport:
    """
    Replace the contents of ``destination`` with ``files``.

    Files are staged in a sibling directory and swapped in with renames, so a
    failure part-way leaves the previous contents in place.
    """
    validate_files(files)
    target = Path(destination).expanduser().resolve()
    parent = ensure_directory(target.parent)
    report = ExportReport(root=target)

    with file_lock(target):
        staging = Path(tempfile.mkdtemp(prefix=f".{target.name}.staging-", dir=parent))
        try:
            for relative, content in files.items():
                path = staging / relative
                if not is_relative_to(path, staging):
                    raise HostingError(f'Invalid file path: "{relative}".')
                write_text_file(path, content, lock=False)
                report.files_written.append(relative)

            previous: Optional[Path] = None
            if target.exists():
                previous = Path(tempfile.mkdtemp(prefix=f".{target.name}.previous-", dir=parent))
                previous.rmdir()
                target.rename(previous)
                report.replaced_previous = True
            try:
                staging.rename(target)
            except OSError:
                if previous is not None:
                    previous.rename(target)
                raise
        except OSError as exc:
            raise HostingError(f"Unable to write site files to {target}: {exc}") from exc
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

        if previous is not None:
            shutil.rmtree(previous, ignore_errors=True)

    logger.info("Exported %d file(s) to %s", len(report.files_written), target)
    return report


class DirectoryHost:
    """Host that serves each site from ``<root>/<site_id>/``."""

    def __init__(self, root: Path | str, base_url: Optional[str] = None) -> None:
        self.root = Path(root).expanduser().resolve()
        self.base_url = base_url.rstrip("/") if base_url else None

    def publish(
        self,
        site_id: str,
        files: Mapping[str, str],
        *,
        site_slug: Optional[str] = None,
        provider_site_id: Optional[str] = None,
    ) -> PublishReceipt:
        destination = self.root / site_id
        if not is_relative_to(destination, self.root) or destination.resolve() == self.root:
            raise HostingError(f"Invalid site id for directory host: {site_id!r}")
        export_files(destination, files)
        url = f"{self.base_url}/{site_id}/" if self.base_url else destination.as_uri()
        return PublishReceipt(url=url, provider_site_id=site_id)
