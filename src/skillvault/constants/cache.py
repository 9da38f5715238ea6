"""Constants for the lint result cache."""

from __future__ import annotations

CACHE_FILENAME: str = ".skillvault-cache.json"
CACHE_VERSION: int = 1
FILE_HASH_CHUNK_SIZE: int = 65536
