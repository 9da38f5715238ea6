"""Constants for vault discovery and document-name derivation."""

from __future__ import annotations

from skillvault.types.common import DocumentKind

SKILL_MARKDOWN_FILENAME: str = "SKILL.md"
DOCUMENT_NAME_FALLBACK: str = "unnamed-document"
DOCUMENT_NAME_DISAMBIGUATION_HASH_LENGTH: int = 8

# Discovery precedence: the first kind that claims a path keeps it.
DOCUMENT_KINDS: tuple[DocumentKind, ...] = ("skill", "command", "mcp_server")

MARKDOWN_SUFFIXES: frozenset[str] = frozenset({".md", ".mdx", ".markdown"})
MCP_CONFIG_SUFFIXES: frozenset[str] = frozenset({".json", ".yaml", ".yml"})
