"""Branding constants for docs and terminal output."""

from __future__ import annotations

BRAND_NAME: str = "SKILLVAULT"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ SKILLVAULT",
    "     // lint skills, commands and MCP pointers",
)
LINT_SUMMARY_TITLE: str = "Lint summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} content vault linter"))
