"""Per-document ``findings.json`` and ``summary.json`` writers.

Reports land under ``<out>/<kind>/<document>/`` so a skill and a command
that share a name never overwrite each other.
"""

from __future__ import annotations

from pathlib import Path

from skillvault.constants.reporting import FINDINGS_FILENAME, SCHEMA_VERSION, SUMMARY_FILENAME
from skillvault.constants.scoring import (
    AGGREGATE_MIN_RULE_SCORE,
    HIGH_SEVERITY_MIN_SCORE,
    MEDIUM_SEVERITY_MIN_SCORE,
)
from skillvault.io import write_json_atomic
from skillvault.model import Finding, Summary
from skillvault.scanner.score import (
    aggregate_overall_score,
    aggregate_severity,
    rule_counts,
    severity_counts,
    sorted_top_issues,
)
from skillvault.types import DocumentKind, JsonObject, Severity

_TOP_ISSUE_KEYS: tuple[str, ...] = ("id", "rule_id", "title", "severity", "score", "evidence")


def write_document_reports(
    out_root: Path,
    kind: DocumentKind,
    document_name: str,
    findings: list[Finding],
    *,
    all_findings: list[Finding] | None = None,
    output_filter: dict[str, object] | None = None,
    rule_overrides: dict[str, dict[str, Severity]] | None = None,
) -> Summary:
    """Write both report files for one document and return its summary.

    *findings* are the shown findings; *all_findings*, when given, is the
    unfiltered set the summary scores against.
    """
    target = out_root / kind / document_name
    listed = sorted(findings, key=lambda finding: finding.id)
    summary = build_summary(
        document_name,
        kind,
        listed,
        all_findings=all_findings,
        output_filter=output_filter,
        rule_overrides=rule_overrides,
    )
    write_json_atomic(path=target / FINDINGS_FILENAME, payload=[finding.to_dict() for finding in listed])
    write_json_atomic(path=target / SUMMARY_FILENAME, payload=summary.to_dict())
    return summary


def build_summary(
    document_name: str,
    kind: DocumentKind,
    findings: list[Finding],
    *,
    all_findings: list[Finding] | None = None,
    output_filter: dict[str, object] | None = None,
    rule_overrides: dict[str, dict[str, Severity]] | None = None,
    min_rule_score: int = AGGREGATE_MIN_RULE_SCORE,
    high_severity_min: int = HIGH_SEVERITY_MIN_SCORE,
    medium_severity_min: int = MEDIUM_SEVERITY_MIN_SCORE,
) -> Summary:
    """Summarize one document; filters change what is listed, never the score."""
    scored = findings if all_findings is None else all_findings
    score = aggregate_overall_score(scored, min_rule_score=min_rule_score)

    return Summary(
        schema_version=SCHEMA_VERSION,
        document=document_name,
        kind=kind,
        overall_score=score,
        overall_severity=aggregate_severity(score, high_min=high_severity_min, medium_min=medium_severity_min),
        finding_count=len(scored),
        counts_by_severity=severity_counts(scored),
        counts_by_rule=rule_counts(scored),
        top_issues=tuple(_top_issue(finding) for finding in sorted_top_issues(scored)),
        shown_finding_count=None if all_findings is None else len(findings),
        output_filter=output_filter,
        rule_overrides=rule_overrides,
    )


def _top_issue(finding: Finding) -> JsonObject:
    payload = finding.to_dict()
    return {key: payload[key] for key in _TOP_ISSUE_KEYS}
