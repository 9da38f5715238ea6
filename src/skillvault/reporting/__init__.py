"""Report writers and the terminal reporter.

Submodules import the scanner's scoring helpers, so the public names are
resolved on first access rather than at package import.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS: dict[str, str] = {
    "StdoutReporter": ".stdout",
    "build_summary": ".writer",
    "write_csv_findings": ".csv_writer",
    "write_document_reports": ".writer",
    "write_sarif_findings": ".sarif_writer",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(import_module(_EXPORTS[name], __name__), name)
