"""Root exception for Skillvault."""

from __future__ import annotations


class SkillvaultError(Exception):
    """Base class for all Skillvault errors."""
