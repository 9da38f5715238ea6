"""Config fingerprinting for cache invalidation."""

from __future__ import annotations

import hashlib
import json

from skillvault.config.model import VaultConfig
from skillvault.constants.checks import DEFAULT_CHECKS


def effective_check_ids(config: VaultConfig) -> tuple[str, ...]:
    """Resolve enabled checks with config overrides."""
    enabled = list(config.checks.enabled or DEFAULT_CHECKS)
    disabled = set(config.checks.disabled)
    return tuple(rule_id for rule_id in enabled if rule_id not in disabled)


def config_fingerprint(config: VaultConfig, max_file_mb_override: int | None = None) -> str:
    """Return a stable hash fingerprint for cache invalidation."""
    payload = {
        "skill_globs": list(config.skill_globs),
        "command_globs": list(config.command_globs),
        "mcp_globs": list(config.mcp_globs),
        "required_frontmatter": {kind: list(keys) for kind, keys in sorted(config.required_frontmatter.items())},
        "checks_enabled": list(config.checks.enabled),
        "checks_disabled": list(config.checks.disabled),
        "effective_checks": list(effective_check_ids(config)),
        "rule_overrides": sorted(
            (rule_id, override.max_severity or "", override.min_severity or "")
            for rule_id, override in config.rule_overrides.items()
        ),
        "command_guard_keys": list(config.command_guard.keys),
        "command_guard_patterns": list(config.command_guard.patterns),
        "links_ignore": list(config.links.ignore),
        "links_check_images": config.links.check_images,
        "max_file_mb": (max_file_mb_override if max_file_mb_override is not None else config.max_file_mb),
    }
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()
