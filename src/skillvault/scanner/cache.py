"""On-disk cache of per-file lint findings."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from skillvault.constants.cache import CACHE_VERSION
from skillvault.io import load_json_file, path_exists, write_json_atomic
from skillvault.types import CacheFileEntry, CachePayload

logger = logging.getLogger(__name__)


def new_cache(config_fingerprint: str = "") -> CachePayload:
    """Create an empty cache payload."""
    return {"version": CACHE_VERSION, "config_fingerprint": config_fingerprint, "files": {}}


def load_cache(path: Path, config_fingerprint: str) -> CachePayload:
    """Load a cache payload, discarding it when missing, corrupt, or stale.

    A cache written under a different config fingerprint or cache version is
    replaced with an empty one rather than partially reused.
    """
    if not path.is_file():
        return new_cache(config_fingerprint)

    try:
        raw = load_json_file(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable cache %s: %s", path, exc)
        return new_cache(config_fingerprint)

    if not isinstance(raw, dict) or raw.get("version") != CACHE_VERSION:
        logger.info("Discarding cache %s: version mismatch", path)
        return new_cache(config_fingerprint)
    if raw.get("config_fingerprint") != config_fingerprint:
        logger.info("Discarding cache %s: config changed", path)
        return new_cache(config_fingerprint)

    files_raw = raw.get("files")
    files: dict[str, CacheFileEntry] = {}
    if isinstance(files_raw, dict):
        for key, value in files_raw.items():
            entry = _normalize_entry(value)
            if isinstance(key, str) and entry is not None:
                files[key] = entry

    return {"version": CACHE_VERSION, "config_fingerprint": config_fingerprint, "files": files}


def save_cache(path: Path, payload: CachePayload) -> None:
    """Persist the cache payload atomically."""
    write_json_atomic(path=path, payload=payload)


def is_cache_hit(
    entry: CacheFileEntry | None,
    *,
    sha256: str,
    mtime_ns: int,
    document_name: str,
    kind: str,
) -> bool:
    """Return True when a cache entry still describes the file and its link targets.

    Besides the file's own signature, every link target recorded for the
    entry must still have the same existence state.
    """
    if entry is None:
        return False
    if entry["sha256"] != sha256 or entry["mtime_ns"] != mtime_ns:
        return False
    if entry["document_name"] != document_name or entry["kind"] != kind:
        return False
    return all(path_exists(Path(target)) == existed for target, existed in entry["link_targets"].items())


def _normalize_entry(value: object) -> CacheFileEntry | None:
    """Validate one persisted file entry; return ``None`` when malformed."""
    if not isinstance(value, dict):
        return None

    mtime_ns = value.get("mtime_ns")
    sha256 = value.get("sha256")
    document_name = value.get("document_name")
    kind = value.get("kind")
    link_targets = value.get("link_targets", {})
    findings = value.get("findings")

    if not isinstance(mtime_ns, int) or isinstance(mtime_ns, bool):
        return None
    if not isinstance(sha256, str) or not isinstance(document_name, str) or not isinstance(kind, str):
        return None
    if not isinstance(link_targets, dict) or not isinstance(findings, list):
        return None
    if not all(isinstance(target, str) and isinstance(existed, bool) for target, existed in link_targets.items()):
        return None

    return {
        "mtime_ns": mtime_ns,
        "sha256": sha256,
        "document_name": document_name,
        "kind": kind,
        "link_targets": dict(link_targets),
        "findings": [item for item in findings if isinstance(item, dict)],
    }
