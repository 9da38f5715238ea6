"""Configuration loading, validation, and fingerprinting for vault lint runs.

This package facade re-exports all public names so that callers can use
``from skillvault.config import ...``.
"""

from __future__ import annotations

from skillvault.config.fingerprint import config_fingerprint, effective_check_ids
from skillvault.config.loader import load_config
from skillvault.config.model import VaultConfig
from skillvault.config.validator import _suggest_key, validate_config_file

__all__ = [
    "VaultConfig",
    "_suggest_key",
    "config_fingerprint",
    "effective_check_ids",
    "load_config",
    "validate_config_file",
]
