"""Config loading and normalization for vault lint runs."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from skillvault.config.model import VaultConfig
from skillvault.constants.checks import DEFAULT_COMMAND_GUARD_KEYS, DEFAULT_COMMAND_GUARD_PATTERNS
from skillvault.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_COMMAND_GLOBS,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_MCP_GLOBS,
    DEFAULT_REQUIRED_FRONTMATTER,
    DEFAULT_SKILL_GLOBS,
    RULE_OVERRIDE_ALLOWED_KEYS,
    RULE_OVERRIDE_ALLOWED_SEVERITIES,
)
from skillvault.constants.docs import DEFAULT_DOC_EXTENSIONS, DEFAULT_EXCLUDE_DIRS
from skillvault.constants.scoring import SEVERITY_RANK
from skillvault.exceptions import ConfigError
from skillvault.types import (
    CheckConfig,
    CommandGuardConfig,
    DocsScanConfig,
    LinkCheckConfig,
    RuleOverrideConfig,
)
from skillvault.utils import normalize_topic


def load_config(root: Path, config_path: Path | None = None) -> VaultConfig:
    """Load and validate vault config from ``skillvault.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return VaultConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    checks_raw = _ensure_mapping(raw.get("checks"), "checks")
    guard_raw = _ensure_mapping(raw.get("command_guard"), "command_guard")
    links_raw = _ensure_mapping(raw.get("links"), "links")
    docs_raw = _ensure_mapping(raw.get("docs"), "docs")

    max_file_mb = raw.get("max_file_mb", DEFAULT_MAX_FILE_MB)
    if isinstance(max_file_mb, bool) or not isinstance(max_file_mb, int) or max_file_mb <= 0:
        raise ConfigError("max_file_mb must be a positive integer")

    check_images = links_raw.get("check_images", True)
    if not isinstance(check_images, bool):
        raise ConfigError("links.check_images must be a boolean")

    return VaultConfig(
        skill_globs=tuple(_ensure_string_list(raw.get("skill_globs", DEFAULT_SKILL_GLOBS), "skill_globs")),
        command_globs=tuple(
            _ensure_string_list(raw.get("command_globs", DEFAULT_COMMAND_GLOBS), "command_globs")
        ),
        mcp_globs=tuple(_ensure_string_list(raw.get("mcp_globs", DEFAULT_MCP_GLOBS), "mcp_globs")),
        max_file_mb=max_file_mb,
        required_frontmatter=_build_required_frontmatter(raw.get("required_frontmatter")),
        checks=CheckConfig(
            enabled=tuple(_ensure_string_list(checks_raw.get("enabled", []), "checks.enabled")),
            disabled=tuple(_ensure_string_list(checks_raw.get("disabled", []), "checks.disabled")),
        ),
        rule_overrides=_build_rule_overrides(raw.get("rule_overrides")),
        command_guard=CommandGuardConfig(
            keys=tuple(
                key.strip()
                for key in _ensure_string_list(
                    guard_raw.get("keys", list(DEFAULT_COMMAND_GUARD_KEYS)),
                    "command_guard.keys",
                )
                if key.strip()
            ),
            patterns=_compile_checked_patterns(
                _ensure_string_list(
                    guard_raw.get("patterns", list(DEFAULT_COMMAND_GUARD_PATTERNS)),
                    "command_guard.patterns",
                ),
            ),
        ),
        links=LinkCheckConfig(
            ignore=tuple(_ensure_string_list(links_raw.get("ignore", []), "links.ignore")),
            check_images=check_images,
        ),
        docs=DocsScanConfig(
            extensions=_normalize_extensions(
                _ensure_string_list(docs_raw.get("extensions", list(DEFAULT_DOC_EXTENSIONS)), "docs.extensions")
            ),
            exclude_dirs=tuple(
                _ensure_string_list(docs_raw.get("exclude_dirs", list(DEFAULT_EXCLUDE_DIRS)), "docs.exclude_dirs")
            ),
        ),
        topics=_build_topics(raw.get("topics")),
    )


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    """Coerce a nested block to a mapping, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _build_required_frontmatter(raw: Any) -> dict[str, tuple[str, ...]]:
    """Merge configured required keys over the per-kind defaults."""
    required = dict(DEFAULT_REQUIRED_FRONTMATTER)
    block = _ensure_mapping(raw, "required_frontmatter")
    for kind, keys in block.items():
        if kind not in DEFAULT_REQUIRED_FRONTMATTER:
            raise ConfigError(
                f"required_frontmatter has unknown document kind {kind!r}; "
                f"expected one of {sorted(DEFAULT_REQUIRED_FRONTMATTER)}"
            )
        required[kind] = tuple(
            key.strip() for key in _ensure_string_list(keys, f"required_frontmatter.{kind}") if key.strip()
        )
    return required


def _build_rule_overrides(raw: Any) -> dict[str, RuleOverrideConfig]:
    block = _ensure_mapping(raw, "rule_overrides")
    overrides: dict[str, RuleOverrideConfig] = {}
    for rule_id, override_raw in block.items():
        if not isinstance(rule_id, str) or not rule_id.strip():
            raise ConfigError("rule_overrides keys must be non-empty rule ids")
        override = _ensure_mapping(override_raw, f"rule_overrides.{rule_id}")
        unknown = set(override) - RULE_OVERRIDE_ALLOWED_KEYS
        if unknown:
            raise ConfigError(f"rule_overrides.{rule_id} has unknown key(s): {', '.join(sorted(unknown))}")
        values: dict[str, Any] = {}
        for key in sorted(RULE_OVERRIDE_ALLOWED_KEYS):
            value = override.get(key)
            if value is None:
                continue
            if not isinstance(value, str) or value not in RULE_OVERRIDE_ALLOWED_SEVERITIES:
                raise ConfigError(
                    f"rule_overrides.{rule_id}.{key} must be one of "
                    f"{sorted(RULE_OVERRIDE_ALLOWED_SEVERITIES)}, got {value!r}"
                )
            values[key] = value
        min_severity = values.get("min_severity")
        max_severity = values.get("max_severity")
        if min_severity and max_severity and SEVERITY_RANK[min_severity] > SEVERITY_RANK[max_severity]:
            raise ConfigError(f"rule_overrides.{rule_id}: min_severity exceeds max_severity")
        overrides[rule_id.strip()] = RuleOverrideConfig(
            max_severity=max_severity,
            min_severity=min_severity,
        )
    return overrides


def _compile_checked_patterns(patterns: list[str]) -> tuple[str, ...]:
    """Return patterns unchanged after confirming each compiles."""
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"command_guard.patterns entry {pattern!r} is not a valid regex: {exc}") from exc
    return tuple(patterns)


def _normalize_extensions(extensions: list[str]) -> tuple[str, ...]:
    """Lowercase extensions and ensure a leading dot."""
    normalized: list[str] = []
    for extension in extensions:
        value = extension.strip().lower()
        if not value:
            continue
        if not value.startswith("."):
            value = f".{value}"
        if value not in normalized:
            normalized.append(value)
    return tuple(normalized)


def _build_topics(raw: Any) -> dict[str, tuple[str, ...]]:
    block = _ensure_mapping(raw, "topics")
    topics: dict[str, tuple[str, ...]] = {}
    for topic, paths in block.items():
        normalized = normalize_topic(str(topic))
        if not normalized:
            raise ConfigError(f"topics key {topic!r} does not normalize to a usable topic")
        if isinstance(paths, str):
            paths = [paths]
        topics[normalized] = tuple(_ensure_string_list(paths, f"topics.{topic}"))
    return topics
