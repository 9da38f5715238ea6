"""Scanner orchestration package."""

from __future__ import annotations

from typing import Any

__all__ = ["lint_vault"]


def __getattr__(name: str) -> Any:
    """Lazily expose scanner APIs to avoid import cycles at package import time."""
    if name == "lint_vault":
        from .orchestrator import lint_vault

        return lint_vault
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
