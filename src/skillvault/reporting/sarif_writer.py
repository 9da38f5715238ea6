"""SARIF 2.1.0 export writer for lint findings.

Artifact URIs are the vault-relative evidence paths, anchored to the
``VAULTROOT`` base id so code-scanning UIs can map them onto a checkout.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from skillvault import __version__
from skillvault.constants.reporting import (
    SARIF_FINDINGS_FILENAME,
    SARIF_SCHEMA_URI,
    SARIF_SEVERITY_MAP,
    SARIF_TOOL_NAME,
    SARIF_URI_BASE_ID,
    SARIF_VERSION,
)
from skillvault.io import write_text_atomic
from skillvault.model import Finding
from skillvault.scanner.score import rule_counts
from skillvault.types import Severity


def build_sarif_envelope(
    findings: list[Finding],
    *,
    root: Path | None = None,
    rule_distribution: dict[str, int] | None = None,
    filter_metadata: dict[str, object] | None = None,
    rule_overrides: dict[str, dict[str, Severity]] | None = None,
) -> dict[str, Any]:
    """Build a complete SARIF 2.1.0 document from findings."""
    ordered = sorted(findings, key=lambda f: (-f.score, f.id))
    rules = _rule_descriptors(ordered)
    rule_index = {rule["id"]: index for index, rule in enumerate(rules)}

    run: dict[str, Any] = {
        "tool": {
            "driver": {
                "name": SARIF_TOOL_NAME,
                "version": __version__,
                "rules": rules,
            },
        },
        "columnKind": "unicodeCodePoints",
        "results": [_result(finding, rule_index[finding.rule_id]) for finding in ordered],
        "properties": {
            "ruleDistribution": rule_distribution if rule_distribution is not None else rule_counts(ordered),
        },
    }
    if root is not None:
        run["originalUriBaseIds"] = {SARIF_URI_BASE_ID: {"uri": root.resolve().as_uri() + "/"}}
    if filter_metadata is not None:
        run["properties"]["filter"] = filter_metadata
    if rule_overrides:
        run["properties"]["ruleOverrides"] = rule_overrides

    return {"$schema": SARIF_SCHEMA_URI, "version": SARIF_VERSION, "runs": [run]}


def write_sarif_findings(
    out_root: Path,
    findings: list[Finding],
    *,
    root: Path | None = None,
    rule_distribution: dict[str, int] | None = None,
    filter_metadata: dict[str, object] | None = None,
    rule_overrides: dict[str, dict[str, Severity]] | None = None,
) -> Path:
    """Write a global findings.sarif under the output root and return the path."""
    sarif_path = out_root / SARIF_FINDINGS_FILENAME
    envelope = build_sarif_envelope(
        findings,
        root=root,
        rule_distribution=rule_distribution,
        filter_metadata=filter_metadata,
        rule_overrides=rule_overrides,
    )
    write_text_atomic(
        path=sarif_path,
        content=json.dumps(envelope, indent=2) + "\n",
    )
    return sarif_path


def _rule_descriptors(findings: list[Finding]) -> list[dict[str, Any]]:
    """One descriptor per observed rule, taken from its highest-scoring finding."""
    first_by_rule: dict[str, Finding] = {}
    kinds_by_rule: dict[str, set[str]] = {}
    for finding in findings:
        first_by_rule.setdefault(finding.rule_id, finding)
        kinds_by_rule.setdefault(finding.rule_id, set()).add(finding.kind)

    descriptors: list[dict[str, Any]] = []
    for rule_id in sorted(first_by_rule):
        sample = first_by_rule[rule_id]
        descriptors.append(
            {
                "id": rule_id,
                "shortDescription": {"text": sample.title},
                "help": {"text": sample.recommendation},
                "defaultConfiguration": {"level": SARIF_SEVERITY_MAP[sample.severity]},
                "properties": {"kinds": sorted(kinds_by_rule[rule_id])},
            }
        )
    return descriptors


def _result(finding: Finding, rule_index: int) -> dict[str, Any]:
    physical: dict[str, Any] = {
        "artifactLocation": {"uri": finding.evidence.path, "uriBaseId": SARIF_URI_BASE_ID},
    }
    if finding.evidence.line is not None:
        region: dict[str, Any] = {"startLine": finding.evidence.line}
        if finding.evidence.snippet:
            region["snippet"] = {"text": finding.evidence.snippet}
        physical["region"] = region

    properties: dict[str, Any] = {
        "score": finding.score,
        "confidence": finding.confidence,
        "document": finding.document,
        "kind": finding.kind,
        "classification": finding.classification,
    }
    if finding.severity_override is not None:
        properties["severity_override"] = {
            "original": finding.severity_override.original,
            "applied": finding.severity_override.applied,
            "reason": finding.severity_override.reason,
        }

    return {
        "ruleId": finding.rule_id,
        "ruleIndex": rule_index,
        "level": SARIF_SEVERITY_MAP.get(finding.severity, "note"),
        "message": {"text": f"{finding.description} {finding.recommendation}".strip()},
        "locations": [
            {
                "physicalLocation": physical,
                "logicalLocations": [{"name": finding.document, "kind": finding.kind}],
            }
        ],
        "partialFingerprints": {"findingId": finding.id},
        "properties": properties,
    }
