"""Frozen dataclasses for the scanner subsystem."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from skillvault.types.common import DocumentKind


@dataclass(frozen=True)
class DiscoveredDocument:
    """A vault file claimed by one document kind."""

    kind: DocumentKind
    path: Path
