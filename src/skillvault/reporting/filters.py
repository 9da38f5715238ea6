"""Output filters shared by the stdout reporter and the report writers.

Filters only decide what is shown; every finding still counts toward the
lint score.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, TypeAlias

from skillvault.constants.scoring import SEVERITY_RANK
from skillvault.model import Finding
from skillvault.types import Severity

HiddenReason: TypeAlias = Literal["below_min_severity", "informational"]


@dataclass(frozen=True)
class OutputFilters:
    min_severity: Severity | None = None
    errors_only: bool = False

    def active(self) -> bool:
        return self.min_severity is not None or self.errors_only

    def hidden_reason(self, finding: Finding) -> HiddenReason | None:
        """Why *finding* is hidden, or ``None`` when it is shown.

        The severity floor is tested first so each hidden finding has exactly one reason.
        """
        if self.min_severity is not None and SEVERITY_RANK[finding.severity] < SEVERITY_RANK[self.min_severity]:
            return "below_min_severity"
        if self.errors_only and finding.classification != "error":
            return "informational"
        return None


def filter_findings(findings: Sequence[Finding], filters: OutputFilters) -> list[Finding]:
    return [finding for finding in findings if filters.hidden_reason(finding) is None]


def count_filtered_reasons(findings: Sequence[Finding], filters: OutputFilters) -> dict[HiddenReason, int]:
    """Count hidden findings per reason; both reasons are always present."""
    counts: Counter[HiddenReason] = Counter({"below_min_severity": 0, "informational": 0})
    for finding in findings:
        reason = filters.hidden_reason(finding)
        if reason is not None:
            counts[reason] += 1
    return dict(counts)


def build_filter_metadata(*, total: int, shown: int, filters: OutputFilters) -> dict[str, object] | None:
    """The ``filter`` block embedded in summaries and SARIF runs, or ``None`` when unfiltered."""
    if not filters.active():
        return None
    return {
        "min_severity": filters.min_severity,
        "errors_only": filters.errors_only,
        "shown": shown,
        "total": total,
        "filtered": max(0, total - shown),
    }
