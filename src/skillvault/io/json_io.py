"""Atomic text and JSON persistence for reports, caches and doc maps."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import TextIO


def load_json_file(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(
    *,
    path: Path,
    payload: object,
    temp_prefix: str | None = None,
    temp_suffix: str = ".tmp",
) -> None:
    """Write *payload* as indented, key-sorted JSON with a trailing newline."""
    rendered = json.dumps(payload, indent=2, sort_keys=True) + "\n"
    write_text_atomic(path=path, content=rendered, temp_prefix=temp_prefix, temp_suffix=temp_suffix)


def write_text_atomic(
    *,
    path: Path,
    content: str,
    temp_prefix: str | None = None,
    temp_suffix: str = ".tmp",
) -> None:
    """Replace *path* with *content* so readers never observe a partial file."""
    with _staged(path, temp_prefix or f".{path.name}.", temp_suffix) as handle:
        handle.write(content)


@contextmanager
def _staged(path: Path, prefix: str, suffix: str) -> Iterator[TextIO]:
    """Yield a temp file beside *path*; it is renamed over *path* only if the block succeeds."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, staging = tempfile.mkstemp(dir=path.parent, prefix=prefix, suffix=suffix)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(staging, path)
    except BaseException:
        with suppress(FileNotFoundError):
            os.unlink(staging)
        raise
