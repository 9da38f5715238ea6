"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "skillvault.yaml"
DEFAULT_MAX_FILE_MB: int = 2

RULE_OVERRIDE_ALLOWED_KEYS: frozenset[str] = frozenset({"max_severity", "min_severity"})
RULE_OVERRIDE_ALLOWED_SEVERITIES: frozenset[str] = frozenset({"high", "medium", "low"})

DEFAULT_SKILL_GLOBS: tuple[str, ...] = ("skills/**/SKILL.md", "skills/*.md")
DEFAULT_COMMAND_GLOBS: tuple[str, ...] = ("commands/**/*.md",)
DEFAULT_MCP_GLOBS: tuple[str, ...] = (
    "mcp-servers/**/*.json",
    "mcp-servers/**/*.yaml",
    "mcp-servers/**/*.yml",
    "mcp-servers/**/*.md",
    ".mcp.json",
)

DEFAULT_REQUIRED_FRONTMATTER: dict[str, tuple[str, ...]] = {
    "skill": ("name", "description", "author", "version"),
    "command": ("description",),
    "mcp_server": (),
}
