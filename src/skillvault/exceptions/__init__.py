"""Shared exception hierarchy for Skillvault."""

from __future__ import annotations

from .base import SkillvaultError
from .config import ConfigError
from .parsing import DocumentParseError

__all__ = [
    "ConfigError",
    "DocumentParseError",
    "SkillvaultError",
]
