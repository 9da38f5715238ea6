"""Tests for configuration loading and fingerprinting."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillvault.config import VaultConfig, config_fingerprint, effective_check_ids, load_config
from skillvault.constants.checks import DEFAULT_CHECKS, DEFAULT_COMMAND_GUARD_KEYS
from skillvault.constants.config import DEFAULT_REQUIRED_FRONTMATTER
from skillvault.exceptions import ConfigError
from skillvault.types import CheckConfig, LinkCheckConfig, RuleOverrideConfig


def _write_config(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "skillvault.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    loaded = load_config(tmp_path)

    assert loaded == VaultConfig()
    assert loaded.required_keys_for("skill") == ("name", "description", "author", "version")
    assert loaded.required_keys_for("mcp_server") == ()
    assert loaded.command_guard.keys == DEFAULT_COMMAND_GUARD_KEYS


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    assert load_config(tmp_path) == VaultConfig()


def test_load_config_explicit_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "nope.yaml")


def test_load_config_reads_overrides(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "skill_globs:\n"
        "  - library/**/SKILL.md\n"
        "max_file_mb: 5\n"
        "required_frontmatter:\n"
        "  command: [description, argument-hint]\n"
        "checks:\n"
        "  disabled: [SKILL_NAME_MISMATCH]\n"
        "rule_overrides:\n"
        "  BROKEN_LINK:\n"
        "    max_severity: low\n"
        "command_guard:\n"
        "  keys: [when]\n"
        "  patterns: ['(?i)manual only']\n"
        "links:\n"
        "  ignore: ['templates/*']\n"
        "  check_images: false\n"
        "docs:\n"
        "  extensions: [MD, .rst]\n"
        "  exclude_dirs: [build]\n"
        "topics:\n"
        "  Code Of_Conduct: CONDUCT.md\n"
        "  design: [docs/architecture.md, docs/design.md]\n",
    )

    loaded = load_config(tmp_path)

    assert loaded.skill_globs == ("library/**/SKILL.md",)
    assert loaded.max_file_mb == 5
    assert loaded.required_keys_for("command") == ("description", "argument-hint")
    assert loaded.required_keys_for("skill") == DEFAULT_REQUIRED_FRONTMATTER["skill"]
    assert loaded.checks.disabled == ("SKILL_NAME_MISMATCH",)
    assert loaded.rule_overrides == {"BROKEN_LINK": RuleOverrideConfig(max_severity="low")}
    assert loaded.command_guard.keys == ("when",)
    assert loaded.command_guard.patterns == ("(?i)manual only",)
    assert loaded.links == LinkCheckConfig(ignore=("templates/*",), check_images=False)
    assert loaded.docs.extensions == (".md", ".rst")
    assert loaded.docs.exclude_dirs == ("build",)
    assert loaded.topics == {
        "code-of-conduct": ("CONDUCT.md",),
        "design": ("docs/architecture.md", "docs/design.md"),
    }


@pytest.mark.parametrize(
    ("yaml_content", "expected_match"),
    [
        ("max_file_mb: true\n", "max_file_mb"),
        ("max_file_mb: 0\n", "max_file_mb"),
        ("skill_globs: 123\n", "skill_globs"),
        ("- a\n- b\n", "mapping"),
        ("checks: [a]\n", "checks"),
        ("links:\n  check_images: maybe\n", "check_images"),
        ("required_frontmatter:\n  agent: [name]\n", "unknown document kind"),
        ("rule_overrides:\n  BROKEN_LINK:\n    max_severity: critical\n", "max_severity"),
        ("rule_overrides:\n  BROKEN_LINK:\n    cap: low\n", "unknown key"),
        ("rule_overrides:\n  BROKEN_LINK:\n    max_severity: low\n    min_severity: high\n", "exceeds"),
        ("command_guard:\n  patterns: ['(unclosed']\n", "not a valid regex"),
        ("topics:\n  '---': README.md\n", "topic"),
        ("skill_globs: [\n", "Invalid YAML"),
    ],
    ids=[
        "bool-max-file-mb",
        "zero-max-file-mb",
        "non-list-globs",
        "non-mapping",
        "checks-not-mapping",
        "non-bool-check-images",
        "unknown-kind",
        "bad-severity",
        "unknown-override-key",
        "contradictory-override",
        "bad-regex",
        "empty-topic",
        "invalid-yaml",
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, yaml_content: str, expected_match: str) -> None:
    _write_config(tmp_path, yaml_content)

    with pytest.raises(ConfigError, match=expected_match):
        load_config(tmp_path)


def test_effective_check_ids_respects_enabled_and_disabled() -> None:
    assert effective_check_ids(VaultConfig()) == DEFAULT_CHECKS

    config = VaultConfig(
        checks=CheckConfig(enabled=("BROKEN_LINK", "COMMAND_GUARD_MISSING"), disabled=("BROKEN_LINK",))
    )

    assert effective_check_ids(config) == ("COMMAND_GUARD_MISSING",)


def test_config_fingerprint_is_stable() -> None:
    assert config_fingerprint(VaultConfig()) == config_fingerprint(VaultConfig())
    assert len(config_fingerprint(VaultConfig())) == 64


@pytest.mark.parametrize(
    "changed",
    [
        VaultConfig(max_file_mb=9),
        VaultConfig(checks=CheckConfig(disabled=("BROKEN_LINK",))),
        VaultConfig(links=LinkCheckConfig(ignore=("x/*",))),
        VaultConfig(rule_overrides={"BROKEN_LINK": RuleOverrideConfig(max_severity="low")}),
        VaultConfig(required_frontmatter={"skill": ("name",), "command": (), "mcp_server": ()}),
    ],
    ids=["max-file-mb", "checks", "links", "overrides", "required-keys"],
)
def test_config_fingerprint_changes_with_lint_settings(changed: VaultConfig) -> None:
    assert config_fingerprint(changed) != config_fingerprint(VaultConfig())


def test_config_fingerprint_honors_max_file_override() -> None:
    assert config_fingerprint(VaultConfig(), max_file_mb_override=9) == config_fingerprint(VaultConfig(max_file_mb=9))


def test_config_fingerprint_ignores_doc_settings() -> None:
    config = VaultConfig(topics={"design": ("docs/architecture.md",)})

    assert config_fingerprint(config) == config_fingerprint(VaultConfig())
