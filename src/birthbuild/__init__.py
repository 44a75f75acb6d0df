"""
Core package for birthbuild: static site generation, checkpoints and deploys.
"""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("birthbuild")
except _metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
