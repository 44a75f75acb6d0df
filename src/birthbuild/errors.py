"""
Exception hierarchy shared across birthbuild modules.
"""

from __future__ import annotations


class BirthbuildError(RuntimeError):
    """Base class for errors surfaced to callers."""


class ConfigError(BirthbuildError):
    """Raised when site spec or settings files cannot be loaded or validated."""


class CheckpointError(BirthbuildError):
    """Raised when the checkpoint history cannot be read or extended."""


class CheckpointNotFoundError(CheckpointError):
    """Raised when a checkpoint id or version does not exist for a site."""


class HostingError(BirthbuildError):
    """Raised by hosting adapters when a publish cannot complete."""


class DeployError(BirthbuildError):
    """Raised when a deploy request cannot be started."""


class DeployInProgressError(DeployError):
    """Raised when a deploy is already in flight for the same site."""

    def __init__(self, site_spec_id: str) -> None:
        super().__init__(f"A deploy is already in progress for site {site_spec_id}.")
        self.site_spec_id = site_spec_id


class DesignError(BirthbuildError):
    """Raised when a design edit carries an invalid colour or an unknown font."""
