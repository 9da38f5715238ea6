"""Validation error records reported by ``validate-config`` and the lint preflight."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One config problem, identified by a stable ``CFGnnn`` code."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""
    line: int | None = None
    column: int | None = None

    @property
    def location(self) -> str:
        """``path[:line[:column]]`` for editors that jump to file positions."""
        if self.line is None:
            return self.path
        if self.column is None:
            return f"{self.path}:{self.line}"
        return f"{self.path}:{self.line}:{self.column}"

    def format(self) -> str:
        subject = f"{self.field}: {self.message}" if self.field else self.message
        rendered = f"[{self.code}] {self.location} {subject}"
        return f"{rendered} ({self.hint})" if self.hint else rendered


def sort_errors(errors: list[ValidationError]) -> list[ValidationError]:
    return sorted(errors, key=lambda e: (e.code, e.path, e.field, e.line or 0))


def format_errors(errors: list[ValidationError]) -> str:
    """Render errors one per line, followed by a count line."""
    lines = [error.format() for error in sort_errors(errors)]
    noun = "error" if len(lines) == 1 else "errors"
    lines.append(f"{len(lines)} configuration {noun} found.")
    return "\n".join(lines)
