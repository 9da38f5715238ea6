"""Check package for Skillvault."""

from .base import Check
from .common import dedupe_candidates, resolve_link_target
from .links import link_target_states
from .rules import CHECK_CLASSES, build_checks

__all__ = [
    "CHECK_CLASSES",
    "Check",
    "build_checks",
    "dedupe_candidates",
    "link_target_states",
    "resolve_link_target",
]
