"""Shared utility helpers."""

from __future__ import annotations

from .naming import normalize_topic, sanitize_output_name

__all__ = ["normalize_topic", "sanitize_output_name"]
