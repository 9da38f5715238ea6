"""Check ids, scores and pattern tables."""

from __future__ import annotations

import re

FRONTMATTER_MISSING_SCORE: int = 75
FRONTMATTER_KEY_MISSING_SCORE: int = 70
FRONTMATTER_KEY_EMPTY_SCORE: int = 62
FRONTMATTER_VERSION_FORMAT_SCORE: int = 30
SKILL_NAME_MISMATCH_SCORE: int = 20
DOCUMENT_EMPTY_SCORE: int = 45
BROKEN_LINK_SCORE: int = 60
COMMAND_GUARD_MISSING_SCORE: int = 55
MCP_POINTER_MISSING_SCORE: int = 68
MCP_URL_INVALID_SCORE: int = 60
MCP_INSECURE_URL_SCORE: int = 45
MCP_UNPINNED_PACKAGE_SCORE: int = 20

DEFAULT_CHECKS: tuple[str, ...] = (
    "FRONTMATTER_MISSING",
    "FRONTMATTER_KEY_MISSING",
    "FRONTMATTER_KEY_EMPTY",
    "FRONTMATTER_VERSION_FORMAT",
    "SKILL_NAME_MISMATCH",
    "DOCUMENT_EMPTY",
    "BROKEN_LINK",
    "COMMAND_GUARD_MISSING",
    "MCP_POINTER_MISSING",
    "MCP_URL_INVALID",
    "MCP_INSECURE_URL",
    "MCP_UNPINNED_PACKAGE",
)

VERSION_PATTERN: re.Pattern[str] = re.compile(r"^v?\d+(\.\d+){0,2}([-+][0-9A-Za-z.-]+)?$")

DEFAULT_COMMAND_GUARD_KEYS: tuple[str, ...] = (
    "disable-model-invocation",
    "argument-hint",
    "allowed-tools",
)
DEFAULT_COMMAND_GUARD_PATTERNS: tuple[str, ...] = (
    r"\$ARGUMENTS\b",
    r"(?i)\bonly\s+(run|use|invoke|execute)\b.*\b(when|if)\b",
    r"(?i)\b(run|use|invoke|execute)\s+(this\s+(command|prompt)\s+)?only\s+(when|if)\b",
    r"(?i)\bdo\s+not\s+(run|use|invoke|execute)\b.*\bunless\b",
)

LINK_SKIP_SCHEMES_PATTERN: re.Pattern[str] = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")

MCP_VALID_URL_SCHEMES: frozenset[str] = frozenset({"http", "https", "ws", "wss"})
MCP_INSECURE_URL_SCHEMES: frozenset[str] = frozenset({"http", "ws"})
LOOPBACK_HOSTS: frozenset[str] = frozenset({"localhost", "127.0.0.1", "::1", "0.0.0.0"})

UNPINNED_TAGS: frozenset[str] = frozenset({"latest", "next", "*"})
