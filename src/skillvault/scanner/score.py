"""Lint score aggregation and finding tallies."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable

from skillvault.constants.scoring import (
    AGGREGATE_MIN_RULE_SCORE,
    HIGH_SEVERITY_MIN_SCORE,
    MEDIUM_SEVERITY_MIN_SCORE,
    TOP_ISSUES_DEFAULT_LIMIT,
)
from skillvault.model import Finding
from skillvault.types import Severity


def aggregate_severity(
    score: int,
    *,
    high_min: int = HIGH_SEVERITY_MIN_SCORE,
    medium_min: int = MEDIUM_SEVERITY_MIN_SCORE,
) -> Severity:
    if score >= high_min:
        return "high"
    return "medium" if score >= medium_min else "low"


def aggregate_overall_score(
    findings: list[Finding],
    *,
    min_rule_score: int = AGGREGATE_MIN_RULE_SCORE,
) -> int:
    """Combine findings into one 0-100 lint score.

    Each rule contributes once, at its worst score, so a vault with fifty
    broken links is not fifty times worse than one with a single broken
    link. Rules at or above *min_rule_score* are combined as independent
    probabilities (``1 - prod(1 - p)``); if none qualifies, the worst
    rule score stands alone.
    """
    worst_by_rule: dict[str, int] = {}
    for finding in findings:
        worst_by_rule[finding.rule_id] = max(worst_by_rule.get(finding.rule_id, 0), finding.score)
    if not worst_by_rule:
        return 0

    qualifying = [score for score in worst_by_rule.values() if score >= min_rule_score]
    if not qualifying:
        return max(worst_by_rule.values())
    clean_odds = math.prod(1.0 - min(1.0, max(0.0, score / 100.0)) for score in qualifying)
    return int(round((1.0 - clean_odds) * 100))


def severity_counts(findings: list[Finding]) -> dict[Severity, int]:
    """Findings per severity; all three keys are always present."""
    counts = Counter(finding.severity for finding in findings)
    return {"high": counts["high"], "medium": counts["medium"], "low": counts["low"]}


def rule_counts(findings: list[Finding]) -> dict[str, int]:
    return _tally(finding.rule_id for finding in findings)


def kind_counts(findings: list[Finding]) -> dict[str, int]:
    return _tally(finding.kind for finding in findings)


def sorted_top_issues(findings: list[Finding], limit: int = TOP_ISSUES_DEFAULT_LIMIT) -> list[Finding]:
    """Worst findings first, ties broken by id."""
    return sorted(findings, key=lambda finding: (-finding.score, finding.id))[:limit]


def _tally(values: Iterable[str]) -> dict[str, int]:
    counts = Counter(values)
    return dict(sorted(counts.items()))
