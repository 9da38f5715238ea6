"""Configuration-related exceptions."""

from __future__ import annotations

from skillvault.exceptions.base import SkillvaultError


class ConfigError(SkillvaultError, ValueError):
    """Raised when lint configuration is invalid."""
