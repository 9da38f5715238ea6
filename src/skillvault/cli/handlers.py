"""CLI subcommand handlers and threshold evaluation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from skillvault.config import VaultConfig, load_config
from skillvault.constants.docs import DOC_MAP_SCHEMA_VERSION
from skillvault.constants.reporting import VALID_OUTPUT_FORMATS
from skillvault.constants.scoring import SEVERITY_RANK
from skillvault.docs import DocNavigator, scan_docs, write_doc_map
from skillvault.exceptions import ConfigError, SkillvaultError
from skillvault.exceptions.validation import format_errors
from skillvault.model import LintResult
from skillvault.reporting import StdoutReporter
from skillvault.scanner import lint_vault
from skillvault.validation import preflight_validate

logger = logging.getLogger(__name__)


def evaluate_fail_thresholds(
    result: LintResult,
    *,
    fail_on: str | None,
    fail_on_score: int | None,
) -> int:
    """Return the exit code for the CI gates: 1 when either gate trips, else 0.

    ``--fail-on`` trips on any finding at or above that severity;
    ``--fail-on-score`` trips when the lint score reaches the value.
    """
    if fail_on is not None:
        floor = SEVERITY_RANK.get(fail_on, 0)
        if any(SEVERITY_RANK.get(finding.severity, 0) >= floor for finding in result.findings):
            return 1
    return int(fail_on_score is not None and result.aggregate_score >= fail_on_score)


def parse_output_formats(raw: str) -> tuple[str, ...]:
    """Split a comma-separated ``--output-format`` value, raising on bad tokens."""
    tokens = [token.strip() for token in raw.split(",")]
    if not tokens or any(not token for token in tokens):
        raise ConfigError("--output-format contains empty or malformed tokens")
    invalid = set(tokens) - VALID_OUTPUT_FORMATS
    if invalid:
        raise ConfigError(
            f"unknown output format(s): {', '.join(sorted(invalid))}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )
    return tuple(dict.fromkeys(tokens))


def handle_lint(args: argparse.Namespace) -> int:
    """Lint a vault, print the stdout report and apply CI thresholds."""
    try:
        output_formats = parse_output_formats(args.output_format)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    validation_errors = preflight_validate(root=args.root, config_path=args.config)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return 2

    try:
        result = lint_vault(
            root=args.root,
            out=args.output_dir,
            config_path=args.config,
            no_cache=args.no_cache,
            max_file_mb=args.max_file_mb,
            output_formats=output_formats,
            min_severity=args.min_severity,
            errors_only=args.errors_only,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except SkillvaultError as exc:
        print(f"Lint error: {exc}", file=sys.stderr)
        return 1

    exit_code = evaluate_fail_thresholds(result, fail_on=args.fail_on, fail_on_score=args.fail_on_score)
    logger.debug("CI gates fail_on=%s fail_on_score=%s -> exit %d", args.fail_on, args.fail_on_score, exit_code)

    if not args.no_stdout:
        reporter = StdoutReporter(
            result,
            color=not args.no_color and sys.stdout.isatty(),
            verbose=args.verbose,
            group_by=args.group_by,
            min_severity=args.min_severity,
            errors_only=args.errors_only,
            summary_only=args.summary_only,
            fail_on=args.fail_on,
            fail_on_score=args.fail_on_score,
            exit_code=exit_code,
        )
        print(reporter.render())

    return exit_code


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def handle_scan_docs(args: argparse.Namespace) -> int:
    """Index documentation files and emit the topic map as JSON."""
    loaded = _docs_context(args)
    if loaded is None:
        return 2
    root, config = loaded

    doc_map = scan_docs(
        root,
        extensions=config.docs.extensions,
        exclude_dirs=config.docs.exclude_dirs,
        max_file_mb=config.max_file_mb,
    )
    if args.output is None:
        print(json.dumps(doc_map.to_dict(schema_version=DOC_MAP_SCHEMA_VERSION), indent=2, sort_keys=True))
        return 0

    try:
        write_doc_map(args.output, doc_map)
    except OSError as exc:
        print(f"Error writing doc map: {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {len(doc_map.documents)} documents under {len(doc_map.topics)} topics to {args.output}")
    return 0


def handle_locate(args: argparse.Namespace) -> int:
    """Resolve documentation topics and exit 1 when any stays unresolved."""
    loaded = _docs_context(args)
    if loaded is None:
        return 2
    root, config = loaded

    navigator = DocNavigator(
        root,
        topics=config.topics,
        docs_config=config.docs,
        max_file_mb=config.max_file_mb,
    )
    allow_fallback = not args.no_fallback
    if args.topics:
        locations = [navigator.locate(topic, allow_fallback=allow_fallback) for topic in args.topics]
    else:
        locations = navigator.locate_all(allow_fallback=allow_fallback)

    if args.json:
        print(json.dumps([location.to_dict(root) for location in locations], indent=2))
    else:
        for location in locations:
            payload = location.to_dict(root)
            rendered = payload["path"] if location.found else "not found"
            print(f"{location.topic:<18} {rendered} ({location.source})")

    return 0 if all(location.found for location in locations) else 1


def _docs_context(args: argparse.Namespace) -> tuple[Path, VaultConfig] | None:
    """Resolve the docs root and its config, printing the problem and returning ``None`` on failure."""
    root = args.root.resolve()
    if not root.is_dir():
        print(f"Configuration error: root directory does not exist: {root}", file=sys.stderr)
        return None
    try:
        return root, load_config(root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return None
