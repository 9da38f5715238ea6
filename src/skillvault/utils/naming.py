"""String normalization helpers for document names and topics."""

from __future__ import annotations

from skillvault.constants.discovery import DOCUMENT_NAME_FALLBACK
from skillvault.constants.naming import (
    COLLAPSE_DASH_PATTERN,
    NON_ALNUM_DASH_PATTERN,
    NON_OUTPUT_NAME_PATTERN,
)


def sanitize_output_name(raw_name: str) -> str:
    """Normalize names for stable output directory paths."""
    normalized = raw_name.strip().lower()
    normalized = NON_OUTPUT_NAME_PATTERN.sub("-", normalized)
    normalized = COLLAPSE_DASH_PATTERN.sub("-", normalized)
    normalized = normalized.strip("-._")
    return normalized or DOCUMENT_NAME_FALLBACK


def normalize_topic(name: str) -> str:
    """Normalize a topic string to lowercase dash-separated form.

    Underscores, dots and whitespace all become dashes so that
    ``Code_Of Conduct`` and ``code-of-conduct`` compare equal. Returns an
    empty string when nothing alphanumeric remains.
    """
    normalized = name.strip().lower()
    normalized = NON_ALNUM_DASH_PATTERN.sub("-", normalized)
    normalized = COLLAPSE_DASH_PATTERN.sub("-", normalized)
    return normalized.strip("-")
