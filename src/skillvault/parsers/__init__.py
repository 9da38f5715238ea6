"""Parsers for vault markdown documents and MCP configs."""

from __future__ import annotations

from .mcp_config import derive_package_pointer, parse_mcp_config_file
from .vault_markdown import parse_vault_markdown_file, parse_vault_markdown_text

__all__ = [
    "derive_package_pointer",
    "parse_mcp_config_file",
    "parse_vault_markdown_file",
    "parse_vault_markdown_text",
]
