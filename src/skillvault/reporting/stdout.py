"""Terminal report for ``skillvault lint``."""

from __future__ import annotations

from skillvault.constants.branding import ASCII_LOGO_LINES, LINT_SUMMARY_TITLE
from skillvault.constants.discovery import DOCUMENT_KINDS
from skillvault.constants.reporting import ANSI_RESET, SEVERITY_COLORS
from skillvault.constants.scoring import SEVERITY_RANK
from skillvault.model import Finding, LintResult
from skillvault.reporting.filters import OutputFilters, count_filtered_reasons, filter_findings
from skillvault.scanner.score import aggregate_overall_score, aggregate_severity, rule_counts
from skillvault.types import Severity

_LABEL_WIDTH = 12
_TOP_RULES_LIMIT = 5
_OVERRIDE_KEYS: tuple[tuple[str, str], ...] = (("max_severity", "max"), ("min_severity", "min"))

# (header, width, alignment)
_TABLE_COLUMNS: tuple[tuple[str, int, str], ...] = (
    ("Document", 25, "<"),
    ("Kind", 10, "<"),
    ("Rule", 26, "<"),
    ("Line", 6, ">"),
    ("Severity", 8, "<"),
    ("Class", 5, "<"),
)


class StdoutReporter:
    """Renders a :class:`LintResult` as a summary block plus a findings table."""

    def __init__(
        self,
        result: LintResult,
        *,
        color: bool = True,
        verbose: bool = False,
        group_by: str | None = None,
        min_severity: Severity | None = None,
        errors_only: bool = False,
        summary_only: bool = False,
        fail_on: Severity | None = None,
        fail_on_score: int | None = None,
        exit_code: int = 0,
    ) -> None:
        self._result = result
        self._color = color
        self._verbose = verbose
        self._group_by = group_by
        self._summary_only = summary_only
        self._fail_on = fail_on
        self._fail_on_score = fail_on_score
        self._exit_code = exit_code
        self._filters = OutputFilters(min_severity=min_severity, errors_only=errors_only)
        self._shown = filter_findings(result.findings, self._filters)

    def render(self) -> str:
        parts = [self._summary()]
        if not self._summary_only and self._shown:
            parts.append(self._grouped() if self._group_by else self._table())
        return "\n".join(parts)

    def _paint(self, text: str, severity: Severity) -> str:
        color = SEVERITY_COLORS.get(severity) if self._color else None
        return f"{color}{text}{ANSI_RESET}" if color else text

    def _summary(self) -> str:
        result = self._result
        with_findings = len({(finding.kind, finding.document) for finding in result.findings})
        clean = max(0, result.scanned_files - with_findings)

        fields: list[tuple[str, str]] = [
            (
                "Lint Score",
                f"{self._paint(str(result.aggregate_score), result.aggregate_severity)} "
                f"({self._paint(result.aggregate_severity, result.aggregate_severity)})",
            ),
            ("Files", f"{result.scanned_files} linted / {with_findings} with findings / {clean} clean"),
            ("Findings", self._finding_totals()),
            (
                "Severities",
                " · ".join(
                    f"{result.counts_by_severity.get(level, 0)} {self._paint(level, level)}"
                    for level in ("high", "medium", "low")
                ),
            ),
        ]
        by_kind = result.counts_by_kind
        if by_kind:
            kinds = [f"{by_kind[kind]} {kind}" for kind in DOCUMENT_KINDS if by_kind.get(kind)]
            fields.append(("Kinds", " · ".join(kinds)))
        fields.append(("Top rules", _top_rules(result.counts_by_rule or rule_counts(list(result.findings)))))
        if self._filters.active():
            fields.append(("Top shown", _top_rules(rule_counts(self._shown))))
        if result.active_rule_overrides:
            fields.append(("Overrides", _overrides(result.active_rule_overrides)))
        verdict = self._verdict()
        if verdict:
            fields.append(("Verdict", verdict))
        fields.append(("Duration", f"{result.duration_seconds:.3f}s"))
        if self._verbose:
            fields.append(("Cache", f"{result.cache_hits} hits / {result.cache_misses} misses"))
            fields.extend(("Warning", warning) for warning in result.warnings)

        lines = ["", *(f"  {line}" for line in ASCII_LOGO_LINES), f"  {LINT_SUMMARY_TITLE}", "  " + "─" * 38, ""]
        lines.extend(f"  {label:<{_LABEL_WIDTH}}{value}" for label, value in fields)
        lines.append("")
        return "\n".join(lines)

    def _finding_totals(self) -> str:
        total = self._result.total_findings
        if not self._filters.active():
            return str(total)
        hidden = count_filtered_reasons(self._result.findings, self._filters)
        reasons: list[str] = []
        if hidden["below_min_severity"] and self._filters.min_severity is not None:
            reasons.append(f"{hidden['below_min_severity']} below {self._filters.min_severity}")
        if hidden["informational"]:
            reasons.append(f"{hidden['informational']} informational")
        detail = " + ".join(reasons) or str(max(0, total - len(self._shown)))
        return f"{len(self._shown)} shown / {total} total ({detail} filtered)"

    def _verdict(self) -> str | None:
        if self._fail_on is None and self._fail_on_score is None:
            return None
        clauses: list[str] = []
        if self._fail_on is not None:
            floor = SEVERITY_RANK[self._fail_on]
            matched = sum(1 for f in self._result.findings if SEVERITY_RANK.get(f.severity, 0) >= floor)
            clauses.append(f"{matched} finding(s) >= {self._fail_on}" if matched else f"no findings >= {self._fail_on}")
        if self._fail_on_score is not None:
            score = self._result.aggregate_score
            comparator = ">=" if score >= self._fail_on_score else "<"
            clauses.append(f"aggregate score {score} {comparator} {self._fail_on_score}")
        return f"{'FAIL' if self._exit_code == 1 else 'PASS'} ({'; '.join(clauses)})"

    def _table(self) -> str:
        def rule(left: str, mid: str, right: str) -> str:
            return "  " + left + mid.join("─" * (width + 2) for _, width, _ in _TABLE_COLUMNS) + right

        def row(cells: list[tuple[str, int]]) -> str:
            rendered = []
            for (text, visible), (_, width, align) in zip(cells, _TABLE_COLUMNS, strict=True):
                pad = " " * max(0, width - visible)
                rendered.append(pad + text if align == ">" else text + pad)
            return "  │ " + " │ ".join(rendered) + " │"

        lines = [
            "  Findings",
            rule("┌", "┬", "┐"),
            row([(title, len(title)) for title, _, _ in _TABLE_COLUMNS]),
            rule("├", "┼", "┤"),
        ]
        for finding in self._shown:
            document = _truncate(finding.document, _TABLE_COLUMNS[0][1])
            rule_id = _truncate(finding.rule_id, _TABLE_COLUMNS[2][1])
            line = "" if finding.evidence.line is None else str(finding.evidence.line)
            klass = "ERR" if finding.classification == "error" else "INFO"
            # Severity is measured before painting so escape codes do not shift the border.
            lines.append(
                row(
                    [
                        (document, len(document)),
                        (finding.kind, len(finding.kind)),
                        (rule_id, len(rule_id)),
                        (line, len(line)),
                        (self._paint(finding.severity, finding.severity), len(finding.severity)),
                        (klass, len(klass)),
                    ]
                )
            )
        lines.append(rule("└", "┴", "┘"))
        return "\n".join(lines)

    def _grouped(self) -> str:
        by_document = self._group_by == "document"
        groups: dict[str, list[Finding]] = {}
        for finding in self._shown:
            key = f"{finding.kind}/{finding.document}" if by_document else finding.rule_id
            groups.setdefault(key, []).append(finding)

        lines = [f"  Findings (grouped by {self._group_by})", ""]
        for key in sorted(groups, key=lambda name: (-max(f.score for f in groups[name]), name)):
            members = sorted(groups[key], key=lambda f: (-f.score, f.id))
            score = aggregate_overall_score(members)
            severity = aggregate_severity(score)
            lines.append(
                f"  [{key}]  score={self._paint(str(score), severity)}"
                f"  severity={self._paint(severity, severity)}  findings={len(members)}"
            )
            for finding in members:
                label = finding.rule_id if by_document else finding.document
                where = f"{finding.evidence.path}:{finding.evidence.line or '-'}"
                lines.append(f"    {label:<26}  {where:<40}  {self._paint(finding.severity, finding.severity)}")
            lines.append("")
        return "\n".join(lines)


def _top_rules(counts: dict[str, int]) -> str:
    if not counts:
        return "none"
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    rendered = [f"{rule_id} {count}" for rule_id, count in ranked[:_TOP_RULES_LIMIT]]
    if len(ranked) > _TOP_RULES_LIMIT:
        rendered.append(f"(+{len(ranked) - _TOP_RULES_LIMIT} more)")
    return " · ".join(rendered)


def _overrides(overrides: dict[str, dict[str, Severity]]) -> str:
    rendered: list[str] = []
    for rule_id, bounds in sorted(overrides.items()):
        limits = [f"{short}={bounds[key]}" for key, short in _OVERRIDE_KEYS if bounds.get(key)]
        if limits:
            rendered.append(f"{rule_id} ({', '.join(limits)})")
    return ", ".join(rendered)


def _truncate(value: str, width: int) -> str:
    return value if len(value) <= width else value[: width - 1] + "…"
