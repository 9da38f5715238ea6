"""Shared helpers for check implementations."""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from urllib.parse import unquote

from skillvault.constants.checks import LINK_SKIP_SCHEMES_PATTERN, UNPINNED_TAGS
from skillvault.model import DocumentField, DocumentLink, Evidence, FindingCandidate, VaultDocument


def field_evidence(document: VaultDocument, field: DocumentField | DocumentLink) -> Evidence:
    """Build evidence from a parsed body line or link."""
    return Evidence(path=document.relative_path, line=field.line, snippet=field.snippet)


def document_evidence(document: VaultDocument, line: int | None = 1, snippet: str | None = None) -> Evidence:
    """Build evidence pointing at a line of the document's raw text."""
    if snippet is None:
        snippet = ""
        lines = _raw_text(document).lstrip("\ufeff").splitlines()
        if line is not None and 0 < line <= len(lines):
            snippet = lines[line - 1].strip()
    return Evidence(path=document.relative_path, line=line, snippet=snippet)


def is_empty_value(value: object) -> bool:
    """Return True for null, blank strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def resolve_link_target(
    target: str,
    *,
    source: Path,
    root: Path,
    ignore: tuple[str, ...] = (),
) -> Path | None:
    """Resolve a markdown link target to a filesystem path, or ``None`` to skip it.

    External URLs, pure anchors and ignored patterns are skipped. A target
    starting with ``/`` resolves from the vault root; anything else resolves
    from the linking document's directory.
    """
    cleaned = target.strip()
    if not cleaned or cleaned.startswith("#") or cleaned.startswith("//"):
        return None
    if LINK_SKIP_SCHEMES_PATTERN.match(cleaned):
        return None
    if any(fnmatch(cleaned, pattern) for pattern in ignore):
        return None

    for separator in ("#", "?"):
        cleaned = cleaned.split(separator, 1)[0]
    cleaned = unquote(cleaned)
    if not cleaned:
        return None

    target_path = root / cleaned.lstrip("/") if cleaned.startswith("/") else source.parent / cleaned
    try:
        return target_path.resolve()
    except (OSError, ValueError):
        # Unresolvable paths (embedded NUL, over-long names) are reported as missing.
        return target_path


def is_pinned_package(package: str) -> bool:
    """Return True when a package pointer names a concrete version, tag or digest."""
    spec = package.strip()
    if "@sha256:" in spec:
        return True
    unscoped = spec[1:] if spec.startswith("@") else spec
    if "@" in unscoped:
        version = unscoped.rsplit("@", 1)[1].strip()
        return bool(version) and version.lower() not in UNPINNED_TAGS
    for operator in ("==", "~=", "==="):
        if operator in spec:
            return bool(spec.split(operator, 1)[1].strip())
    last_segment = spec.rsplit("/", 1)[-1]
    if ":" in last_segment:
        tag = last_segment.rsplit(":", 1)[1].strip()
        return bool(tag) and tag.lower() not in UNPINNED_TAGS
    return False


def dedupe_candidates(candidates: list[FindingCandidate]) -> list[FindingCandidate]:
    """Drop duplicate candidates sharing rule, location, and description."""
    seen: set[tuple[str, str, int | None, str]] = set()
    deduped: list[FindingCandidate] = []

    for candidate in candidates:
        key = (
            candidate.rule_id,
            candidate.evidence.path,
            candidate.evidence.line,
            candidate.description,
        )
        if key in seen:
            continue
        seen.add(key)
        deduped.append(candidate)

    return deduped


def _raw_text(document: VaultDocument) -> str:
    if document.markdown is not None:
        return document.markdown.raw_text
    if document.mcp_config is not None:
        return document.mcp_config.raw_text
    return ""
