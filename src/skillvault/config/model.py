"""Config data model for vault lint runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from skillvault.constants.config import (
    DEFAULT_COMMAND_GLOBS,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_MCP_GLOBS,
    DEFAULT_REQUIRED_FRONTMATTER,
    DEFAULT_SKILL_GLOBS,
)
from skillvault.types import (
    CheckConfig,
    CommandGuardConfig,
    DocsScanConfig,
    DocumentKind,
    LinkCheckConfig,
    RuleOverrideConfig,
)


@dataclass(frozen=True)
class VaultConfig:
    """Resolved vault config."""

    skill_globs: tuple[str, ...] = DEFAULT_SKILL_GLOBS
    command_globs: tuple[str, ...] = DEFAULT_COMMAND_GLOBS
    mcp_globs: tuple[str, ...] = DEFAULT_MCP_GLOBS
    max_file_mb: int = DEFAULT_MAX_FILE_MB
    required_frontmatter: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_REQUIRED_FRONTMATTER)
    )
    checks: CheckConfig = CheckConfig()
    rule_overrides: dict[str, RuleOverrideConfig] = field(default_factory=dict)
    command_guard: CommandGuardConfig = CommandGuardConfig()
    links: LinkCheckConfig = LinkCheckConfig()
    docs: DocsScanConfig = DocsScanConfig()
    topics: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def globs_for(self, kind: DocumentKind) -> tuple[str, ...]:
        """Discovery globs configured for a document kind."""
        if kind == "skill":
            return self.skill_globs
        if kind == "command":
            return self.command_globs
        return self.mcp_globs

    def required_keys_for(self, kind: DocumentKind) -> tuple[str, ...]:
        """Frontmatter keys that must be present and non-empty for a kind."""
        return self.required_frontmatter.get(kind, ())
