"""File-level helpers for hashing and path rendering."""

from __future__ import annotations

import hashlib
from pathlib import Path

from skillvault.constants.cache import FILE_HASH_CHUNK_SIZE


def file_sha256(path: Path) -> str:
    """Return SHA-256 hex digest for a file."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def relative_posix(path: Path, root: Path) -> str:
    """Render *path* relative to *root* when possible, else as an absolute POSIX path."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def path_exists(path: Path) -> bool:
    """Return ``path.exists()``, treating paths the OS rejects as missing."""
    try:
        return path.exists()
    except (OSError, ValueError):
        return False
