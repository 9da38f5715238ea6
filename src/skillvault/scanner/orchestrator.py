"""End-to-end lint orchestration for a content vault."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from skillvault.checks import build_checks, dedupe_candidates, link_target_states
from skillvault.config import config_fingerprint, effective_check_ids, load_config
from skillvault.constants.cache import CACHE_FILENAME
from skillvault.constants.discovery import MARKDOWN_SUFFIXES
from skillvault.constants.reporting import VALID_OUTPUT_FORMATS
from skillvault.exceptions import ConfigError, DocumentParseError
from skillvault.io import file_sha256, relative_posix
from skillvault.model import Finding, LintResult, VaultDocument
from skillvault.parsers import parse_mcp_config_file, parse_vault_markdown_file
from skillvault.reporting.filters import OutputFilters, build_filter_metadata, filter_findings
from skillvault.scanner.cache import is_cache_hit, load_cache, new_cache, save_cache
from skillvault.scanner.conversion import candidate_to_finding, deserialize_findings
from skillvault.scanner.discovery import assign_unique_document_names, discover_vault_documents
from skillvault.scanner.score import (
    aggregate_overall_score,
    aggregate_severity,
    kind_counts,
    rule_counts,
    severity_counts,
)
from skillvault.types import CacheFileEntry, DocumentKind, Severity

logger = logging.getLogger(__name__)


def lint_vault(
    *,
    root: Path,
    out: Path | None = None,
    config_path: Path | None = None,
    no_cache: bool = False,
    max_file_mb: int | None = None,
    output_formats: tuple[str, ...] = ("json",),
    min_severity: Severity | None = None,
    errors_only: bool = False,
) -> LintResult:
    """Lint every discovered vault document and optionally write reports under *out*."""
    invalid_formats = set(output_formats) - VALID_OUTPUT_FORMATS
    if invalid_formats:
        raise ConfigError(
            f"Unknown output format(s): {', '.join(sorted(invalid_formats))}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )

    started_at = time.perf_counter()
    root = root.resolve()
    if out is not None:
        out = out.resolve()

    if not root.is_dir():
        raise ConfigError(f"Vault root does not exist or is not a directory: {root}")

    if out is not None:
        _ensure_writable(out)

    config = load_config(root, config_path)
    resolved_max_file_mb = max_file_mb if max_file_mb is not None else config.max_file_mb
    warnings: list[str] = []

    discovered = discover_vault_documents(root, config, resolved_max_file_mb)
    names_by_file, collisions = assign_unique_document_names(discovered, root)
    for (kind, base_name), paths in sorted(collisions.items()):
        rendered_paths = ", ".join(relative_posix(path, root) for path in paths)
        _warn(
            warnings,
            f"Duplicate {kind} name '{base_name}' resolved across multiple files "
            f"({rendered_paths}); applying deterministic suffixes.",
        )

    check_ids = effective_check_ids(config)
    checks = build_checks(check_ids)
    active_rule_overrides = {
        rule_id: override for rule_id, override in config.rule_overrides.items() if rule_id in check_ids
    }
    for rule_id in sorted(set(config.rule_overrides) - set(check_ids)):
        _warn(warnings, f"Unknown rule_overrides entry '{rule_id}' has no enabled check and will be ignored.")
    serialized_rule_overrides = {
        rule_id: override.bounds() for rule_id, override in sorted(active_rule_overrides.items()) if override.bounds()
    }

    fingerprint = config_fingerprint(config, resolved_max_file_mb)
    cache_path = out / CACHE_FILENAME if out is not None and not no_cache else None
    cache_payload = load_cache(cache_path, fingerprint) if cache_path is not None else new_cache(fingerprint)
    cache_files = cache_payload["files"]
    cache_hits = 0
    cache_misses = 0
    discovered_keys: set[str] = set()

    findings_by_document: dict[tuple[DocumentKind, str], list[Finding]] = {}

    for item in discovered:
        path = item.path
        cache_key = relative_posix(path, root)
        discovered_keys.add(cache_key)
        document_name = names_by_file[path]

        try:
            mtime_ns = int(path.stat().st_mtime_ns)
            sha256 = file_sha256(path)
        except OSError as exc:
            _warn(warnings, f"Failed to read file metadata: {cache_key} ({exc})")
            continue

        entry = cache_files.get(cache_key)
        if is_cache_hit(entry, sha256=sha256, mtime_ns=mtime_ns, document_name=document_name, kind=item.kind):
            assert entry is not None
            cache_hits += 1
            findings_by_document.setdefault((item.kind, document_name), []).extend(
                deserialize_findings(entry["findings"])
            )
            continue

        cache_misses += 1
        try:
            document = _load_document(item.kind, path, root, document_name)
        except DocumentParseError as exc:
            _warn(warnings, f"Parse error in {cache_key}: {exc}")
            cache_files.pop(cache_key, None)
            continue

        candidates = [
            candidate
            for check in checks
            if check.applies_to(document)
            for candidate in check.run(document=document, config=config)
        ]
        findings = [
            candidate_to_finding(
                document_name,
                item.kind,
                candidate,
                rule_override=active_rule_overrides.get(candidate.rule_id),
            )
            for candidate in dedupe_candidates(candidates)
        ]
        findings_by_document.setdefault((item.kind, document_name), []).extend(findings)

        cache_entry: CacheFileEntry = {
            "mtime_ns": mtime_ns,
            "sha256": sha256,
            "document_name": document_name,
            "kind": item.kind,
            "link_targets": link_target_states(document, config) if "BROKEN_LINK" in check_ids else {},
            "findings": [finding.to_dict() for finding in findings],
        }
        cache_files[cache_key] = cache_entry

    for stale_key in set(cache_files) - discovered_keys:
        cache_files.pop(stale_key, None)

    output_filters = OutputFilters(min_severity=min_severity, errors_only=errors_only)
    all_findings: list[Finding] = []
    for kind, document_name in sorted(findings_by_document):
        document_findings = findings_by_document[(kind, document_name)]
        if out is not None:
            from skillvault.reporting import write_document_reports

            shown = filter_findings(document_findings, output_filters)
            write_document_reports(
                out,
                kind,
                document_name,
                shown,
                all_findings=document_findings,
                output_filter=build_filter_metadata(
                    total=len(document_findings),
                    shown=len(shown),
                    filters=output_filters,
                ),
                rule_overrides=serialized_rule_overrides,
            )
        all_findings.extend(document_findings)

    if out is not None:
        _write_global_reports(
            out,
            all_findings,
            root=root,
            output_formats=output_formats,
            output_filters=output_filters,
            rule_overrides=serialized_rule_overrides,
        )

    if cache_path is not None:
        save_cache(cache_path, cache_payload)

    agg_score = aggregate_overall_score(all_findings)
    logger.info(
        "Linted %d files: %d findings, score %d (%d cache hits)",
        len(discovered),
        len(all_findings),
        agg_score,
        cache_hits,
    )

    return LintResult(
        scanned_files=len(discovered),
        total_findings=len(all_findings),
        aggregate_score=agg_score,
        aggregate_severity=aggregate_severity(agg_score),
        counts_by_severity=severity_counts(all_findings),
        findings=tuple(sorted(all_findings, key=lambda f: (-f.score, f.id))),
        duration_seconds=time.perf_counter() - started_at,
        warnings=tuple(warnings),
        cache_hits=cache_hits,
        cache_misses=cache_misses,
        counts_by_kind=kind_counts(all_findings),
        counts_by_rule=rule_counts(all_findings),
        active_rule_overrides=serialized_rule_overrides,
    )


def _load_document(kind: DocumentKind, path: Path, root: Path, name: str) -> VaultDocument:
    """Parse a discovered file into a vault document for its kind."""
    if path.suffix.lower() in MARKDOWN_SUFFIXES:
        return VaultDocument(kind=kind, path=path, root=root, name=name, markdown=parse_vault_markdown_file(path))
    return VaultDocument(kind=kind, path=path, root=root, name=name, mcp_config=parse_mcp_config_file(path))


def _ensure_writable(out: Path) -> None:
    try:
        out.mkdir(parents=True, exist_ok=True)
        probe = out / ".skillvault_write_probe"
        probe.touch()
        probe.unlink()
    except OSError as exc:
        raise ConfigError(f"Output directory is not writable: {out} ({exc})") from exc


def _write_global_reports(
    out: Path,
    all_findings: list[Finding],
    *,
    root: Path,
    output_formats: tuple[str, ...],
    output_filters: OutputFilters,
    rule_overrides: dict[str, dict[str, Severity]],
) -> None:
    """Write run-wide CSV and SARIF exports when requested."""
    shown_all_findings = filter_findings(all_findings, output_filters)
    if "csv" in output_formats:
        from skillvault.reporting import write_csv_findings

        write_csv_findings(out, shown_all_findings)

    if "sarif" in output_formats:
        from skillvault.reporting import write_sarif_findings

        write_sarif_findings(
            out,
            shown_all_findings,
            root=root,
            rule_distribution=rule_counts(all_findings),
            filter_metadata=build_filter_metadata(
                total=len(all_findings),
                shown=len(shown_all_findings),
                filters=output_filters,
            ),
            rule_overrides=rule_overrides,
        )


def _warn(warnings: list[str], message: str) -> None:
    warnings.append(message)
    logger.warning(message)

