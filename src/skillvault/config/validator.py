"""Collect-all validation of ``skillvault.yaml``.

Every problem found is reported; nothing here raises. ``validate-config``
prints the result, and ``lint`` refuses to start while it is non-empty.
"""

from __future__ import annotations

import difflib
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from skillvault.constants.checks import DEFAULT_CHECKS
from skillvault.constants.config import (
    CONFIG_FILENAME,
    RULE_OVERRIDE_ALLOWED_KEYS,
    RULE_OVERRIDE_ALLOWED_SEVERITIES,
)
from skillvault.constants.scoring import SEVERITY_RANK
from skillvault.constants.validation import (
    ALLOWED_CHECK_KEYS,
    ALLOWED_COMMAND_GUARD_KEYS,
    ALLOWED_CONFIG_KEYS,
    ALLOWED_DOCS_KEYS,
    ALLOWED_LINKS_KEYS,
    ALLOWED_REQUIRED_FRONTMATTER_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    CFG011,
    LIST_OF_STRINGS_KEYS,
)
from skillvault.exceptions.validation import ValidationError


class _Report:
    """Accumulates errors for one config file."""

    def __init__(self, path: Path) -> None:
        self.path = str(path)
        self.errors: list[ValidationError] = []

    def add(self, code: str, field: str, message: str, *, hint: str = "", mark: Any = None) -> None:
        self.errors.append(
            ValidationError(
                code=code,
                path=self.path,
                field=field,
                message=message,
                hint=hint,
                line=mark.line + 1 if mark is not None else None,
                column=mark.column + 1 if mark is not None else None,
            )
        )

    def unknown_keys(self, mapping: dict[Any, Any], allowed: frozenset[str], prefix: str = "") -> None:
        for key in sorted(mapping, key=str):
            if key in allowed:
                continue
            scope = f" in `{prefix}`" if prefix else ""
            self.add(
                CFG004,
                f"{prefix}.{key}" if prefix else str(key),
                f"unknown key `{key}`{scope}",
                hint=_suggest_key(str(key), allowed),
            )

    def string_list(self, value: Any, field: str) -> list[str] | None:
        """Return *value* as a list when it is a list of strings; ``None`` is accepted silently."""
        if value is None:
            return []
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            return list(value)
        self.add(CFG005, field, f"invalid type for `{field}`", hint="expected a list of strings")
        return None

    def mapping(self, raw: dict[str, Any], field: str, allowed: frozenset[str] | None = None) -> dict[Any, Any]:
        """Return the nested mapping at *field*, or an empty one after reporting a bad shape."""
        value = raw.get(field)
        if value is None:
            return {}
        if not isinstance(value, dict):
            self.add(CFG009, field, f"`{field}` must be a mapping")
            return {}
        if allowed is not None:
            self.unknown_keys(value, allowed, field)
        return value


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate the vault config and return every error found.

    A missing default ``skillvault.yaml`` is fine; a missing file passed with
    ``--config`` is ``CFG001``.
    """
    path = config_path.resolve() if config_path else root.resolve() / CONFIG_FILENAME
    report = _Report(path)

    if not path.exists():
        if config_explicit:
            report.add(CFG001, "", f"config file not found: {path}")
        return report.errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        report.add(CFG002, "", f"invalid YAML: {exc}", mark=getattr(exc, "problem_mark", None))
        return report.errors

    if raw is None:
        return report.errors
    if not isinstance(raw, dict):
        report.add(CFG003, "", f"config must be a YAML mapping, got {type(raw).__name__}")
        return report.errors

    report.unknown_keys(raw, ALLOWED_CONFIG_KEYS)
    _check_max_file_mb(raw, report)
    for key in LIST_OF_STRINGS_KEYS:
        report.string_list(raw.get(key), key)

    required = report.mapping(raw, "required_frontmatter", ALLOWED_REQUIRED_FRONTMATTER_KEYS)
    for kind in sorted(ALLOWED_REQUIRED_FRONTMATTER_KEYS & required.keys()):
        report.string_list(required[kind], f"required_frontmatter.{kind}")

    _check_checks(report.mapping(raw, "checks", ALLOWED_CHECK_KEYS), report)
    _check_command_guard(report.mapping(raw, "command_guard", ALLOWED_COMMAND_GUARD_KEYS), report)

    links = report.mapping(raw, "links", ALLOWED_LINKS_KEYS)
    report.string_list(links.get("ignore"), "links.ignore")
    if "check_images" in links and not isinstance(links["check_images"], bool):
        report.add(CFG005, "links.check_images", "invalid type for `links.check_images`", hint="expected a boolean")

    docs = report.mapping(raw, "docs", ALLOWED_DOCS_KEYS)
    for key in ("extensions", "exclude_dirs"):
        report.string_list(docs.get(key), f"docs.{key}")

    # A topic maps to one path or to a list of candidate paths.
    for topic, paths in report.mapping(raw, "topics").items():
        if not isinstance(paths, str):
            report.string_list(paths, f"topics.{topic}")

    _check_rule_overrides(report.mapping(raw, "rule_overrides"), report)
    return report.errors


def _check_max_file_mb(raw: dict[str, Any], report: _Report) -> None:
    if "max_file_mb" not in raw:
        return
    value = raw["max_file_mb"]
    if isinstance(value, bool) or not isinstance(value, int):
        report.add(CFG005, "max_file_mb", "invalid type for `max_file_mb`", hint="expected a positive integer")
    elif value <= 0:
        report.add(CFG007, "max_file_mb", f"`max_file_mb` must be a positive integer, got {value}")


def _check_checks(block: dict[Any, Any], report: _Report) -> None:
    known = frozenset(DEFAULT_CHECKS)
    selected: dict[str, set[str]] = {}
    for list_name in ("enabled", "disabled"):
        rule_ids = report.string_list(block.get(list_name), f"checks.{list_name}")
        if rule_ids is None:
            continue
        selected[list_name] = set(rule_ids)
        for rule_id in _unknown(rule_ids, known):
            report.add(
                CFG006,
                f"checks.{list_name}",
                f"unknown check `{rule_id}`",
                hint=_suggest_key(rule_id, known),
            )

    both = sorted(selected.get("enabled", set()) & selected.get("disabled", set()))
    if both:
        report.add(
            CFG008,
            "checks",
            f"check(s) in both enabled and disabled: {', '.join(both)}",
            hint="remove duplicates from one list",
        )


def _check_command_guard(block: dict[Any, Any], report: _Report) -> None:
    report.string_list(block.get("keys"), "command_guard.keys")
    for pattern in report.string_list(block.get("patterns"), "command_guard.patterns") or []:
        try:
            re.compile(pattern)
        except re.error as exc:
            report.add(CFG011, "command_guard.patterns", f"invalid regular expression {pattern!r}: {exc}")


def _check_rule_overrides(overrides: dict[Any, Any], report: _Report) -> None:
    for rule_id, override in overrides.items():
        if not isinstance(rule_id, str) or not rule_id.strip():
            report.add(CFG005, "rule_overrides", "rule_overrides keys must be non-empty strings")
            continue
        field = f"rule_overrides.{rule_id}"
        if not isinstance(override, dict):
            report.add(CFG009, field, f"`{field}` must be a mapping")
            continue
        report.unknown_keys(override, RULE_OVERRIDE_ALLOWED_KEYS, field)

        bounds: dict[str, str] = {}
        for key in ("min_severity", "max_severity"):
            value = override.get(key)
            if value is None:
                continue
            if isinstance(value, str) and value in RULE_OVERRIDE_ALLOWED_SEVERITIES:
                bounds[key] = value
                continue
            allowed = ", ".join(sorted(RULE_OVERRIDE_ALLOWED_SEVERITIES))
            report.add(
                CFG006,
                f"{field}.{key}",
                f"invalid value for `{key}`",
                hint=f"expected one of: {allowed}; got: {value!r}",
            )

        if len(bounds) == 2 and SEVERITY_RANK[bounds["min_severity"]] > SEVERITY_RANK[bounds["max_severity"]]:
            report.add(
                CFG008,
                field,
                f"min_severity {bounds['min_severity']!r} is higher than max_severity {bounds['max_severity']!r}",
                hint="set min_severity <= max_severity",
            )


def _unknown(values: Iterable[str], known: frozenset[str]) -> list[str]:
    return [value for value in values if value not in known]


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a ``did you mean`` hint for the closest allowed name, or ``""``."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    return f"did you mean `{matches[0]}`?" if matches else ""
