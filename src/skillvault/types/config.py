"""Typed configuration structures for vault lint settings."""

from __future__ import annotations

from dataclasses import dataclass

from skillvault.constants.checks import (
    DEFAULT_COMMAND_GUARD_KEYS,
    DEFAULT_COMMAND_GUARD_PATTERNS,
)
from skillvault.constants.docs import DEFAULT_DOC_EXTENSIONS, DEFAULT_EXCLUDE_DIRS
from skillvault.types.common import Severity


@dataclass(frozen=True)
class CheckConfig:
    """Check enablement toggles."""

    enabled: tuple[str, ...] = ()
    disabled: tuple[str, ...] = ()


@dataclass(frozen=True)
class RuleOverrideConfig:
    """Per-rule override settings from ``skillvault.yaml``."""

    max_severity: Severity | None = None
    min_severity: Severity | None = None

    def bounds(self) -> dict[str, Severity]:
        """The configured limits only, as written to report metadata."""
        limits: dict[str, Severity] = {}
        if self.max_severity is not None:
            limits["max_severity"] = self.max_severity
        if self.min_severity is not None:
            limits["min_severity"] = self.min_severity
        return limits


@dataclass(frozen=True)
class CommandGuardConfig:
    """Frontmatter keys and body patterns that count as an invocation guard."""

    keys: tuple[str, ...] = DEFAULT_COMMAND_GUARD_KEYS
    patterns: tuple[str, ...] = DEFAULT_COMMAND_GUARD_PATTERNS


@dataclass(frozen=True)
class LinkCheckConfig:
    """Relative link checking options."""

    ignore: tuple[str, ...] = ()
    check_images: bool = True


@dataclass(frozen=True)
class DocsScanConfig:
    """File selection for the documentation scanner."""

    extensions: tuple[str, ...] = DEFAULT_DOC_EXTENSIONS
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
