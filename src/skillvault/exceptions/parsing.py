"""Parsing-related exceptions."""

from __future__ import annotations

from skillvault.exceptions.base import SkillvaultError


class DocumentParseError(SkillvaultError, ValueError):
    """Raised when a vault document or MCP config cannot be parsed."""
