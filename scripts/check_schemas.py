#!/usr/bin/env python3
"""Guardrail script that keeps the published JSON schemas honest.

Checks performed:
1. Every ``schemas/*.schema.json`` is a valid Draft 2020-12 schema.
2. Linting the fixture vault and indexing its docs produces JSON that
   validates against those schemas.

Exit codes:
  0 - schemas and emitted artifacts agree.
  1 - a schema is invalid or an emitted artifact does not validate.
"""

from __future__ import annotations

import json
import sys
import tempfile
from pathlib import Path

import jsonschema

from skillvault.constants.docs import DOC_MAP_SCHEMA_VERSION
from skillvault.constants.reporting import FINDINGS_FILENAME, SUMMARY_FILENAME
from skillvault.docs import scan_docs
from skillvault.scanner import lint_vault

REPO_ROOT: Path = Path(__file__).resolve().parent.parent
SCHEMAS_DIR: Path = REPO_ROOT / "schemas"
FIXTURE_VAULT: Path = REPO_ROOT / "tests" / "fixtures" / "vaults" / "basic"


def _load(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


def _check_schema_files() -> list[str]:
    errors: list[str] = []
    for schema_path in sorted(SCHEMAS_DIR.glob("*.schema.json")):
        try:
            jsonschema.Draft202012Validator.check_schema(_load(schema_path))
        except (json.JSONDecodeError, jsonschema.SchemaError) as exc:
            errors.append(f"{schema_path.name}: {exc}")
    return errors


def _validate(instance: object, schema_name: str, label: str) -> list[str]:
    validator = jsonschema.Draft202012Validator(_load(SCHEMAS_DIR / schema_name))
    return [f"{label}: {error.message}" for error in validator.iter_errors(instance)]


def _check_emitted_artifacts() -> list[str]:
    errors: list[str] = []
    with tempfile.TemporaryDirectory() as tmp:
        out = Path(tmp)
        lint_vault(root=FIXTURE_VAULT, out=out, no_cache=True)
        for findings_path in sorted(out.rglob(FINDINGS_FILENAME)):
            label = findings_path.parent.relative_to(out).as_posix()
            errors.extend(_validate(_load(findings_path), "findings.schema.json", f"{label}/{FINDINGS_FILENAME}"))
            summary_path = findings_path.with_name(SUMMARY_FILENAME)
            errors.extend(_validate(_load(summary_path), "summary.schema.json", f"{label}/{SUMMARY_FILENAME}"))

    doc_map = scan_docs(FIXTURE_VAULT).to_dict(schema_version=DOC_MAP_SCHEMA_VERSION)
    errors.extend(_validate(doc_map, "doc-map.schema.json", "doc map"))
    return errors


def main() -> int:
    """Run schema checks and return exit code."""
    errors = _check_schema_files()
    if not errors:
        errors = _check_emitted_artifacts()

    for error in errors:
        print(f"ERROR:   {error}")

    if errors:
        print(f"\n{len(errors)} schema problem(s) found.")
        return 1

    print("Schemas and emitted artifacts agree.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
