"""Documentation scanning and topic navigation."""

from __future__ import annotations

from .navigator import DocNavigator, build_topic_table
from .scanner import derive_topic, scan_docs, write_doc_map

__all__ = ["DocNavigator", "build_topic_table", "derive_topic", "scan_docs", "write_doc_map"]
