"""Tests for config validation error codes, hints and preflight ordering."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillvault.config import _suggest_key, load_config, validate_config_file
from skillvault.constants.config import RULE_OVERRIDE_ALLOWED_KEYS
from skillvault.constants.validation import (
    ALL_CFG_CODES,
    ALLOWED_CONFIG_KEYS,
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
from skillvault.exceptions import ConfigError
from skillvault.exceptions.validation import ValidationError, format_errors, sort_errors
from skillvault.validation import preflight_validate


def _write_config(tmp_path: Path, content: str) -> Path:
    cfg = tmp_path / "skillvault.yaml"
    cfg.write_text(content, encoding="utf-8")
    return cfg


def test_validation_error_format_with_all_fields() -> None:
    err = ValidationError(
        code="CFG004",
        path="/vault/skillvault.yaml",
        field="skill_glob",
        message="unknown key `skill_glob`",
        hint="did you mean `skill_globs`?",
        line=3,
        column=1,
    )
    assert err.format() == (
        "[CFG004] /vault/skillvault.yaml:3:1 skill_glob: unknown key `skill_glob` (did you mean `skill_globs`?)"
    )


def test_sort_errors_is_deterministic() -> None:
    errs = [
        ValidationError(code="CFG005", path="/b.yaml", field="x", message="m"),
        ValidationError(code="CFG004", path="/a.yaml", field="y", message="m"),
        ValidationError(code="CFG004", path="/a.yaml", field="x", message="m"),
    ]
    sorted_errs = sort_errors(errs)
    assert [e.code for e in sorted_errs] == ["CFG004", "CFG004", "CFG005"]
    assert [e.field for e in sorted_errs] == ["x", "y", "x"]
    rendered = format_errors(errs).splitlines()
    assert rendered[0] == "[CFG004] /a.yaml x: m"
    assert rendered[-1] == "3 configuration errors found."


def test_validation_error_location_without_line() -> None:
    err = ValidationError(code="CFG010", path="/vault", field="", message="root directory does not exist: /vault")

    assert err.location == "/vault"
    assert err.format() == "[CFG010] /vault root directory does not exist: /vault"
    assert format_errors([err]).endswith("1 configuration error found.")


@pytest.mark.parametrize(
    ("unknown", "expected_in_hint"),
    [
        pytest.param("skill_glob", "skill_globs", id="close-match"),
        pytest.param("requried_frontmatter", "required_frontmatter", id="transposed"),
        pytest.param("zzzzz_totally_wrong", "", id="no-match"),
    ],
)
def test_suggest_key(unknown: str, expected_in_hint: str) -> None:
    hint = _suggest_key(unknown, ALLOWED_CONFIG_KEYS)
    if expected_in_hint:
        assert expected_in_hint in hint
    else:
        assert hint == ""


def test_missing_default_config_returns_no_errors(tmp_path: Path) -> None:
    assert validate_config_file(tmp_path) == []


def test_missing_explicit_config_returns_cfg001(tmp_path: Path) -> None:
    errors = validate_config_file(tmp_path, tmp_path / "missing.yaml", config_explicit=True)

    assert [e.code for e in errors] == [CFG001]


def test_invalid_yaml_reports_line(tmp_path: Path) -> None:
    _write_config(tmp_path, "checks:\n  enabled: [\n")

    errors = validate_config_file(tmp_path)

    assert [e.code for e in errors] == [CFG002]
    assert errors[0].line is not None


@pytest.mark.parametrize(
    ("yaml_content", "expected_code"),
    [
        pytest.param("- item1\n- item2\n", CFG003, id="non-mapping"),
        pytest.param("skill_glob: []\n", CFG004, id="unknown-top-level"),
        pytest.param("links:\n  ignores: []\n", CFG004, id="unknown-links-key"),
        pytest.param("max_file_mb: true\n", CFG005, id="bool-max-file-mb"),
        pytest.param("mcp_globs: 12\n", CFG005, id="non-list-globs"),
        pytest.param("links:\n  check_images: maybe\n", CFG005, id="non-bool-check-images"),
        pytest.param("docs:\n  extensions: md\n", CFG005, id="non-list-extensions"),
        pytest.param("topics:\n  design: 5\n", CFG005, id="non-string-topic-path"),
        pytest.param("required_frontmatter:\n  skill: name\n", CFG005, id="non-list-required-keys"),
        pytest.param("checks:\n  enabled: [BROKEN_LNK]\n", CFG006, id="unknown-check"),
        pytest.param("rule_overrides:\n  BROKEN_LINK:\n    max_severity: critical\n", CFG006, id="bad-severity"),
        pytest.param("max_file_mb: -1\n", CFG007, id="negative-max-file-mb"),
        pytest.param("checks:\n  enabled: [BROKEN_LINK]\n  disabled: [BROKEN_LINK]\n", CFG008, id="overlap"),
        pytest.param(
            "rule_overrides:\n  BROKEN_LINK:\n    max_severity: low\n    min_severity: high\n",
            CFG008,
            id="contradictory-override",
        ),
        pytest.param("checks: notamap\n", CFG009, id="checks-not-mapping"),
        pytest.param("topics: [a, b]\n", CFG009, id="topics-not-mapping"),
        pytest.param("rule_overrides:\n  BROKEN_LINK: low\n", CFG009, id="override-not-mapping"),
        pytest.param("command_guard:\n  patterns: ['(unclosed']\n", CFG011, id="bad-regex"),
    ],
)
def test_config_file_rejects_invalid_values(tmp_path: Path, yaml_content: str, expected_code: str) -> None:
    _write_config(tmp_path, yaml_content)

    errors = validate_config_file(tmp_path)

    assert any(e.code == expected_code for e in errors)


def test_unknown_check_includes_suggestion(tmp_path: Path) -> None:
    _write_config(tmp_path, "checks:\n  disabled: [BROKEN_LNK]\n")

    errors = validate_config_file(tmp_path)

    assert len(errors) == 1
    assert errors[0].field == "checks.disabled"
    assert errors[0].hint == "did you mean `BROKEN_LINK`?"


def test_validation_collects_every_error(tmp_path: Path) -> None:
    _write_config(tmp_path, "skill_glob: []\nmax_file_mb: 0\nlinks: 3\n")

    codes = sorted(e.code for e in validate_config_file(tmp_path))

    assert codes == [CFG004, CFG007, CFG009]


def test_valid_config_has_no_errors(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "skill_globs: ['skills/**/SKILL.md']\n"
        "max_file_mb: 4\n"
        "required_frontmatter:\n  command: [description]\n"
        "checks:\n  disabled: [SKILL_NAME_MISMATCH]\n"
        "rule_overrides:\n  MCP_UNPINNED_PACKAGE:\n    min_severity: medium\n"
        "command_guard:\n  keys: [argument-hint]\n  patterns: ['\\$ARGUMENTS']\n"
        "links:\n  ignore: []\n  check_images: true\n"
        "docs:\n  exclude_dirs: [node_modules]\n"
        "topics:\n  design: docs/architecture.md\n",
    )

    assert validate_config_file(tmp_path) == []


def test_preflight_reports_missing_root(tmp_path: Path) -> None:
    errors = preflight_validate(tmp_path / "absent")

    assert [e.code for e in errors] == [CFG010]


def test_preflight_sorts_config_errors(tmp_path: Path) -> None:
    _write_config(tmp_path, "max_file_mb: 0\nskill_glob: []\n")

    errors = preflight_validate(tmp_path)

    assert [e.code for e in errors] == [CFG004, CFG007]


def test_cfg_codes_are_unique_and_ordered() -> None:
    assert len(set(ALL_CFG_CODES)) == len(ALL_CFG_CODES)
    assert list(ALL_CFG_CODES) == sorted(ALL_CFG_CODES)


def test_validator_and_loader_agree_on_rule_override_keys(tmp_path: Path) -> None:
    allowed = "".join(f"    {key}: low\n" for key in sorted(RULE_OVERRIDE_ALLOWED_KEYS))
    _write_config(tmp_path, f"rule_overrides:\n  BROKEN_LINK:\n{allowed}")

    assert validate_config_file(tmp_path) == []
    assert load_config(tmp_path).rule_overrides["BROKEN_LINK"].bounds() == {
        "max_severity": "low",
        "min_severity": "low",
    }

    _write_config(tmp_path, "rule_overrides:\n  BROKEN_LINK:\n    cap: low\n")

    errors = validate_config_file(tmp_path)
    assert [(e.code, e.field) for e in errors] == [(CFG004, "rule_overrides.BROKEN_LINK.cap")]
    with pytest.raises(ConfigError, match="unknown key"):
        load_config(tmp_path)
