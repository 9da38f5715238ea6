"""Typed cache payload structures."""

from __future__ import annotations

from typing import TypedDict

from skillvault.types.common import JsonObject


class CacheFileEntry(TypedDict):
    """Cache metadata for a single linted file."""

    mtime_ns: int
    sha256: str
    document_name: str
    kind: str
    link_targets: dict[str, bool]
    findings: list[JsonObject]


class CachePayload(TypedDict):
    """Top-level cache payload persisted to disk."""

    version: int
    config_fingerprint: str
    files: dict[str, CacheFileEntry]
