"""Tests for CLI subcommands and exit codes."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from skillvault.cli.handlers import parse_output_formats
from skillvault.cli.main import build_parser, main
from skillvault.exceptions import ConfigError


def test_build_parser_lint_defaults(tmp_path: Path) -> None:
    args = build_parser().parse_args(["lint", "-r", str(tmp_path)])

    assert args.root == tmp_path
    assert args.output_dir is None
    assert args.output_format == "json"
    assert args.no_cache is False
    assert args.group_by is None


def test_build_parser_requires_subcommand() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parse_output_formats_dedupes() -> None:
    assert parse_output_formats("json, sarif,json") == ("json", "sarif")


@pytest.mark.parametrize("raw", ["json,,csv", "", "json,xml"])
def test_parse_output_formats_rejects_bad_tokens(raw: str) -> None:
    with pytest.raises(ConfigError):
        parse_output_formats(raw)


def test_lint_prints_summary_and_exits_zero(basic_vault_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["lint", "-r", str(basic_vault_root), "--no-color"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Lint Score  100 (high)" in out
    assert "Files       6 linted / 4 with findings / 2 clean" in out
    assert "FRONTMATTER_MISSING" in out


def test_lint_writes_output_dir(basic_vault_root: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    exit_code = main(
        ["lint", "-r", str(basic_vault_root), "-o", str(out), "--output-format", "json,csv", "--no-stdout"]
    )

    assert exit_code == 0
    assert (out / "command" / "deploy" / "findings.json").is_file()
    assert (out / "findings.csv").is_file()


def test_lint_bad_output_format_exits_two(basic_vault_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["lint", "-r", str(basic_vault_root), "--output-format", "pdf"])

    assert exit_code == 2
    assert "unknown output format" in capsys.readouterr().err


def test_lint_invalid_config_exits_two(vault_copy: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (vault_copy / "skillvault.yaml").write_text("skill_glob: []\n", encoding="utf-8")

    exit_code = main(["lint", "-r", str(vault_copy)])

    assert exit_code == 2
    assert "[CFG004]" in capsys.readouterr().err


def test_lint_missing_root_exits_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["lint", "-r", str(tmp_path / "absent")])

    assert exit_code == 2
    assert "[CFG010]" in capsys.readouterr().err


def test_validate_config_success(basic_vault_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate-config", "-r", str(basic_vault_root)]) == 0
    assert "Configuration is valid." in capsys.readouterr().out


def test_validate_config_missing_explicit_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["validate-config", "-r", str(tmp_path), "-c", str(tmp_path / "nope.yaml")])

    assert exit_code == 2
    assert "[CFG001]" in capsys.readouterr().err


def test_scan_docs_prints_json(basic_vault_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan-docs", "-r", str(basic_vault_root)]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["topics"]["architecture"] == ["docs/architecture.md"]
    assert len(payload["documents"]) == 9


def test_scan_docs_writes_file(basic_vault_root: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "doc-map.json"

    assert main(["scan-docs", "-r", str(basic_vault_root), "-o", str(target)]) == 0

    assert target.is_file()
    assert capsys.readouterr().out.startswith("Wrote 9 documents under ")


def test_scan_docs_uses_config_exclusions(vault_copy: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (vault_copy / "skillvault.yaml").write_text("docs:\n  exclude_dirs: [skills, commands]\n", encoding="utf-8")

    assert main(["scan-docs", "-r", str(vault_copy)]) == 0

    paths = [entry["path"] for entry in json.loads(capsys.readouterr().out)["documents"]]
    assert paths == ["README.md", "docs/architecture.md", "docs/guides/README.md"]


def test_scan_docs_missing_root_exits_two(tmp_path: Path) -> None:
    assert main(["scan-docs", "-r", str(tmp_path / "absent")]) == 2


def test_locate_text_output(basic_vault_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["locate", "-r", str(basic_vault_root), "design", "deployment"])

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert lines[0].split() == ["architecture", "docs/architecture.md", "(table)"]
    assert lines[1].split() == ["deployment", "README.md", "(fallback)"]


def test_locate_json_without_fallback_exits_one(basic_vault_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["locate", "-r", str(basic_vault_root), "guides", "deployment", "--json", "--no-fallback"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert [item["source"] for item in payload] == ["doc_map", "missing"]
    assert payload[0]["path"] == "docs/guides/README.md"
    assert payload[1]["path"] is None


def test_locate_uses_configured_topics(vault_copy: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (vault_copy / "skillvault.yaml").write_text("topics:\n  runbook: commands/deploy.md\n", encoding="utf-8")

    assert main(["locate", "-r", str(vault_copy), "Runbook"]) == 0
    assert "commands/deploy.md (table)" in capsys.readouterr().out


def test_locate_bad_config_exits_two(vault_copy: Path) -> None:
    (vault_copy / "skillvault.yaml").write_text("topics: [a]\n", encoding="utf-8")

    assert main(["locate", "-r", str(vault_copy), "readme"]) == 2
