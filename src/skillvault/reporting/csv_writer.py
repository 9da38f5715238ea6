"""Flat ``findings.csv`` export, one row per shown finding."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from skillvault.constants.reporting import CSV_COLUMNS, CSV_FINDINGS_FILENAME
from skillvault.io import write_text_atomic
from skillvault.model import Finding


def write_csv_findings(out_root: Path, findings: list[Finding]) -> Path:
    path = out_root / CSV_FINDINGS_FILENAME
    write_text_atomic(path=path, content=render_csv_string(findings))
    return path


def render_csv_string(findings: list[Finding]) -> str:
    """Render findings highest score first; a missing line is an empty cell."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    writer.writerows(_row(finding) for finding in sorted(findings, key=lambda f: (-f.score, f.id)))
    return buffer.getvalue()


def _row(finding: Finding) -> dict[str, object]:
    row: dict[str, object] = dict(finding.to_dict())
    row["path"] = finding.evidence.path
    row["line"] = "" if finding.evidence.line is None else finding.evidence.line
    return row
