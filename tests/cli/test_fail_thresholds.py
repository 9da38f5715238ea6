"""Tests for CI exit-code gating via --fail-on and --fail-on-score."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import pytest

from skillvault.cli.handlers import evaluate_fail_thresholds
from skillvault.cli.main import build_parser, main
from skillvault.model import Evidence, Finding, LintResult


def _empty_result(**overrides: Any) -> LintResult:
    """Build a minimal LintResult with sensible defaults."""
    defaults: dict[str, Any] = {
        "scanned_files": 1,
        "total_findings": 0,
        "aggregate_score": 0,
        "aggregate_severity": "low",
        "counts_by_severity": {"high": 0, "medium": 0, "low": 0},
        "findings": (),
        "duration_seconds": 0.1,
    }
    defaults.update(overrides)
    return LintResult(**defaults)


def _make_finding(*, severity: Literal["low", "medium", "high"] = "high", score: int = 75) -> Finding:
    return Finding(
        id="test-id",
        severity=severity,
        score=score,
        confidence="high",
        title="Test",
        description="desc",
        evidence=Evidence(path="skills/a/SKILL.md", line=1, snippet="x"),
        document="a",
        rule_id="FRONTMATTER_MISSING",
        recommendation="Fix it",
    )


def test_build_parser_fail_on_accepts_valid_choices(tmp_path: Path) -> None:
    parser = build_parser()
    for level in ("high", "medium", "low"):
        args = parser.parse_args(["lint", "--root", str(tmp_path), "--fail-on", level])
        assert args.fail_on == level


def test_build_parser_fail_on_rejects_unknown(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["lint", "--root", str(tmp_path), "--fail-on", "critical"])


@pytest.mark.parametrize(
    ("findings", "fail_on", "fail_on_score", "aggregate_score", "expected"),
    [
        pytest.param((), None, None, 0, 0, id="no-thresholds"),
        pytest.param((_make_finding(severity="medium", score=55),), "high", None, 55, 0, id="below-severity"),
        pytest.param((_make_finding(severity="medium", score=55),), "medium", None, 55, 1, id="at-severity"),
        pytest.param((_make_finding(severity="high"),), "low", None, 75, 1, id="above-severity"),
        pytest.param((), None, 50, 49, 0, id="below-score"),
        pytest.param((), None, 50, 50, 1, id="at-score"),
        pytest.param((_make_finding(severity="low", score=20),), "high", 10, 20, 1, id="either-condition"),
    ],
)
def test_evaluate_fail_thresholds(
    findings: tuple[Finding, ...],
    fail_on: str | None,
    fail_on_score: int | None,
    aggregate_score: int,
    expected: int,
) -> None:
    result = _empty_result(findings=findings, total_findings=len(findings), aggregate_score=aggregate_score)

    assert evaluate_fail_thresholds(result, fail_on=fail_on, fail_on_score=fail_on_score) == expected


def test_lint_fail_on_high_exits_one(basic_vault_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["lint", "--root", str(basic_vault_root), "--fail-on", "high", "--no-color"])

    assert exit_code == 1
    assert "Verdict     FAIL" in capsys.readouterr().out


def test_lint_fail_on_score_above_aggregate_passes(basic_vault_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["lint", "--root", str(basic_vault_root), "--fail-on-score", "101", "--no-stdout"])

    assert exit_code == 0
    assert capsys.readouterr().out == ""
