"""
Filesystem helpers shared by the checkpoint store and hosting adapters.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Optional

from filelock import FileLock

logger = logging.getLogger(__name__)


def ensure_directory(path: Path | str) -> Path:
    """
    Ensure a directory exists, returning the resolved Path.
    """
    resolved = Path(path).expanduser().resolve()
    resolved.mkdir(parents=True, exist_ok=True)
    return resolved


def _ensure_parent(target: Path) -> None:
    """Ensure the parent directory for target exists."""
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)


def is_relative_to(path: Path, base: Path) -> bool:
    """Return True if path is under base."""
    try:
        path.resolve().relative_to(base.resolve())
    except ValueError:
        return False
    return True


@contextmanager
def file_lock(path: Path | str, *, timeout: float = -1):
    """
    Context manager for a filesystem lock file alongside the target.

    A timeout of 0 makes the acquisition non-blocking; `filelock.Timeout`
    propagates to the caller when the lock is held elsewhere.
    """
    target = Path(path).expanduser().resolve()
    lock_path = target.with_suffix(f"{target.suffix}.lock")
    _ensure_parent(lock_path)
    with FileLock(str(lock_path), timeout=timeout):
        yield


def _atomic_write_text(target: Path, content: str, encoding: str) -> None:
    """Write text atomically by staging a temp file and renaming."""
    _ensure_parent(target)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, target)
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        except OSError:
            pass


def write_text_file(path: Path | str, content: str, encoding: str = "utf-8", *, lock: bool = True) -> Path:
    """
    Write text to a file, creating parent directories as needed.
    """
    target = Path(path).expanduser().resolve()
    if lock:
        with file_lock(target):
            _atomic_write_text(target, content, encoding=encoding)
    else:
        _atomic_write_text(target, content, encoding=encoding)
    return target


def read_json_file(path: Path | str) -> Optional[Any]:
    """
    Read a JSON document, returning None when the file does not exist.

    Decoding errors propagate; a corrupt record is not the same as a missing one.
    """
    target = Path(path).expanduser()
    try:
        raw = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    return json.loads(raw)
