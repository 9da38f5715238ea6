"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid enum value / unknown check id
CFG007: str = "CFG007"  # value out of range
CFG008: str = "CFG008"  # contradictory check config
CFG009: str = "CFG009"  # invalid nested mapping
CFG010: str = "CFG010"  # root directory not found
CFG011: str = "CFG011"  # invalid regular expression

ALL_CFG_CODES: tuple[str, ...] = (
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    CFG010,
    CFG011,
)

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "skill_globs",
        "command_globs",
        "mcp_globs",
        "max_file_mb",
        "required_frontmatter",
        "checks",
        "rule_overrides",
        "command_guard",
        "links",
        "docs",
        "topics",
    }
)

ALLOWED_CHECK_KEYS: frozenset[str] = frozenset({"enabled", "disabled"})
ALLOWED_REQUIRED_FRONTMATTER_KEYS: frozenset[str] = frozenset({"skill", "command", "mcp_server"})
ALLOWED_COMMAND_GUARD_KEYS: frozenset[str] = frozenset({"keys", "patterns"})
ALLOWED_LINKS_KEYS: frozenset[str] = frozenset({"ignore", "check_images"})
ALLOWED_DOCS_KEYS: frozenset[str] = frozenset({"extensions", "exclude_dirs"})

LIST_OF_STRINGS_KEYS: tuple[str, ...] = (
    "skill_globs",
    "command_globs",
    "mcp_globs",
)
