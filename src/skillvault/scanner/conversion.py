"""Turn check candidates into scored findings, and cached payloads back into findings."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Collection
from typing import TypeVar, cast

from skillvault.constants.discovery import DOCUMENT_KINDS
from skillvault.constants.ids import FINDING_ID_HEX_LENGTH
from skillvault.constants.scoring import HIGH_SEVERITY_MIN_SCORE, MEDIUM_SEVERITY_MIN_SCORE, SEVERITY_RANK
from skillvault.model import Evidence, Finding, FindingCandidate, SeverityOverride
from skillvault.scanner.score import aggregate_severity
from skillvault.types import Classification, Confidence, DocumentKind, RuleOverrideConfig, Severity

logger = logging.getLogger(__name__)

_LiteralT = TypeVar("_LiteralT", bound=str)

_LEVELS: tuple[str, ...] = ("low", "medium", "high")
_CLASSIFICATIONS: tuple[str, ...] = ("error", "informational")


def candidate_to_finding(
    document_name: str,
    kind: DocumentKind,
    candidate: FindingCandidate,
    *,
    rule_override: RuleOverrideConfig | None = None,
    high_severity_min: int = HIGH_SEVERITY_MIN_SCORE,
    medium_severity_min: int = MEDIUM_SEVERITY_MIN_SCORE,
) -> Finding:
    """Bind a candidate to its document, clamp and band its score, and apply any rule override."""
    thresholds = (medium_severity_min, high_severity_min)
    score = max(0, min(100, int(candidate.score)))
    severity = aggregate_severity(score, high_min=high_severity_min, medium_min=medium_severity_min)

    severity_override: SeverityOverride | None = None
    if rule_override is not None:
        adjusted = _within_override(score, severity, rule_override, thresholds)
        if adjusted != score:
            applied = aggregate_severity(adjusted, high_min=high_severity_min, medium_min=medium_severity_min)
            logger.debug("%s on %s: override moved %s -> %s", candidate.rule_id, document_name, severity, applied)
            severity_override = SeverityOverride(original=severity, applied=applied, reason="rule_override")
            score, severity = adjusted, applied

    return Finding(
        id=finding_id(document_name, kind, candidate),
        severity=severity,
        score=score,
        confidence=candidate.confidence,
        title=candidate.title,
        description=candidate.description,
        evidence=candidate.evidence,
        document=document_name,
        rule_id=candidate.rule_id,
        recommendation=candidate.recommendation,
        kind=kind,
        classification=candidate.classification,
        severity_override=severity_override,
    )


def finding_id(document_name: str, kind: DocumentKind, candidate: FindingCandidate) -> str:
    """Stable identifier derived from the document and the candidate's location."""
    evidence = candidate.evidence
    parts = (
        kind,
        document_name,
        candidate.rule_id,
        candidate.title,
        candidate.description,
        evidence.path,
        str(evidence.line),
        evidence.snippet,
    )
    return hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()[:FINDING_ID_HEX_LENGTH]


def _band(severity: Severity, thresholds: tuple[int, int]) -> tuple[int, int]:
    """Inclusive score range that maps to *severity* under the given thresholds."""
    medium_min, high_min = thresholds
    if severity == "high":
        return high_min, 100
    if severity == "medium":
        return medium_min, max(medium_min, high_min - 1)
    return 0, max(0, medium_min - 1)


def _within_override(
    score: int,
    severity: Severity,
    rule_override: RuleOverrideConfig,
    thresholds: tuple[int, int],
) -> int:
    """Move *score* into the band allowed by the override's floor and ceiling."""
    floor, ceiling = rule_override.min_severity, rule_override.max_severity
    if floor is not None and SEVERITY_RANK[severity] < SEVERITY_RANK[floor]:
        score = max(score, _band(floor, thresholds)[0])
        severity = floor
    if ceiling is not None and SEVERITY_RANK[severity] > SEVERITY_RANK[ceiling]:
        score = min(score, _band(ceiling, thresholds)[1])
    return score


def deserialize_findings(raw_findings: object) -> list[Finding]:
    """Rebuild findings from a cache entry; entries without an evidence object are dropped."""
    if not isinstance(raw_findings, list):
        return []
    return [
        _finding_from_payload(item, item["evidence"])
        for item in raw_findings
        if isinstance(item, dict) and isinstance(item.get("evidence"), dict)
    ]


def _finding_from_payload(item: dict[str, object], evidence: dict[str, object]) -> Finding:
    line = evidence.get("line")
    score = item.get("score")
    override = item.get("severity_override")
    return Finding(
        id=str(item.get("id", "")),
        severity=as_severity(item.get("severity")),
        score=score if isinstance(score, int) else 0,
        confidence=as_confidence(item.get("confidence")),
        title=str(item.get("title", "")),
        description=str(item.get("description", "")),
        evidence=Evidence(
            path=str(evidence.get("path", "")),
            line=line if isinstance(line, int) else None,
            snippet=str(evidence.get("snippet", "")),
        ),
        document=str(item.get("document", "")),
        rule_id=str(item.get("rule_id", "")),
        recommendation=str(item.get("recommendation", "")),
        kind=as_kind(item.get("kind")),
        classification=as_classification(item.get("classification")),
        severity_override=(
            SeverityOverride(
                original=as_severity(override.get("original")),
                applied=as_severity(override.get("applied")),
                reason=str(override.get("reason", "")),
            )
            if isinstance(override, dict)
            else None
        ),
    )


def _coerce(value: object, allowed: Collection[str], default: _LiteralT) -> _LiteralT:
    if isinstance(value, str) and value in allowed:
        return cast(_LiteralT, value)
    return default


def as_severity(value: object) -> Severity:
    return _coerce(value, _LEVELS, cast(Severity, "low"))


def as_confidence(value: object) -> Confidence:
    return _coerce(value, _LEVELS, cast(Confidence, "low"))


def as_classification(value: object) -> Classification:
    return _coerce(value, _CLASSIFICATIONS, cast(Classification, "error"))


def as_kind(value: object) -> DocumentKind:
    return _coerce(value, DOCUMENT_KINDS, cast(DocumentKind, "skill"))
