"""Vault discovery and document naming."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TypeAlias

from skillvault.config import VaultConfig
from skillvault.constants.discovery import (
    DOCUMENT_KINDS,
    DOCUMENT_NAME_DISAMBIGUATION_HASH_LENGTH,
    MARKDOWN_SUFFIXES,
    MCP_CONFIG_SUFFIXES,
    SKILL_MARKDOWN_FILENAME,
)
from skillvault.exceptions import DocumentParseError
from skillvault.io import relative_posix
from skillvault.parsers import parse_vault_markdown_file
from skillvault.types import DiscoveredDocument, DocumentKind
from skillvault.utils import sanitize_output_name

logger = logging.getLogger(__name__)

NameCollisions: TypeAlias = dict[tuple[str, str], tuple[Path, ...]]


def discover_vault_documents(root: Path, config: VaultConfig, max_file_mb: int) -> list[DiscoveredDocument]:
    """Find skills, commands and MCP server files under *root*.

    A path matched by several kinds belongs to the first kind in
    ``DOCUMENT_KINDS``. The result is ordered by kind, then root-relative path.
    """
    vault = root.resolve()
    claimed: dict[Path, DocumentKind] = {}
    for kind in DOCUMENT_KINDS:
        suffixes = MARKDOWN_SUFFIXES | MCP_CONFIG_SUFFIXES if kind == "mcp_server" else MARKDOWN_SUFFIXES
        for path in _matching_files(vault, config.globs_for(kind), suffixes, max_file_mb):
            claimed.setdefault(path, kind)

    rank = {kind: index for index, kind in enumerate(DOCUMENT_KINDS)}
    ordered = sorted(claimed.items(), key=lambda item: (rank[item[1]], relative_posix(item[0], vault)))
    return [DiscoveredDocument(kind=kind, path=path) for path, kind in ordered]


def _matching_files(
    root: Path,
    patterns: tuple[str, ...],
    suffixes: frozenset[str],
    max_file_mb: int,
) -> Iterator[Path]:
    limit = max_file_mb * 1024 * 1024
    for pattern in patterns:
        for path in root.glob(pattern):
            if not path.is_file() or path.suffix.lower() not in suffixes:
                continue
            try:
                size = path.stat().st_size
            except OSError as exc:
                logger.debug("Skipping %s: %s", path, exc)
                continue
            if size > limit:
                logger.info("Skipping %s: larger than %d MB", path, max_file_mb)
                continue
            yield path.resolve()


def derive_document_name(file_path: Path, root: Path, *, declared_name: str | None = None) -> str:
    """Output name for a file: declared ``name``, else ``SKILL.md``'s folder, else its path.

    The path form drops the kind's top-level folder and the suffix, so
    ``commands/git/sync.md`` becomes ``git-sync``.
    """
    if declared_name:
        return sanitize_output_name(declared_name)
    file_path = file_path.resolve()
    if file_path.name == SKILL_MARKDOWN_FILENAME:
        return sanitize_output_name(file_path.parent.name)
    try:
        parts = file_path.relative_to(root.resolve()).with_suffix("").parts
    except ValueError:
        return sanitize_output_name(file_path.stem)
    return sanitize_output_name("-".join(parts[1:] or parts))


def assign_unique_document_names(
    documents: list[DiscoveredDocument],
    root: Path,
) -> tuple[dict[Path, str], NameCollisions]:
    """Name every file, suffixing names shared within a kind with a path hash.

    Returns the names by path and, for each ``(kind, name)`` that collided,
    the colliding paths in root-relative order.
    """
    vault = root.resolve()
    names: dict[Path, str] = {}
    claimants: dict[tuple[str, str], list[Path]] = {}
    for document in documents:
        path = document.path.resolve()
        declared = extract_frontmatter_name(path) if path.suffix.lower() in MARKDOWN_SUFFIXES else None
        names[path] = derive_document_name(path, vault, declared_name=declared)
        claimants.setdefault((document.kind, names[path]), []).append(path)

    collisions: NameCollisions = {}
    for (kind, name), paths in sorted(claimants.items()):
        if len(paths) < 2:
            continue
        collisions[(kind, name)] = tuple(sorted(paths, key=lambda path: relative_posix(path, vault)))
        for path in paths:
            digest = hashlib.sha256(relative_posix(path, vault).encode("utf-8")).hexdigest()
            names[path] = f"{name}-{digest[:DOCUMENT_NAME_DISAMBIGUATION_HASH_LENGTH]}"
    return names, collisions


def extract_frontmatter_name(path: Path) -> str | None:
    """Declared frontmatter ``name``, stripped, or ``None``.

    Files that fail to parse fall back to path naming here; the lint pass
    reports the parse error itself.
    """
    try:
        parsed = parse_vault_markdown_file(path)
    except (OSError, DocumentParseError) as exc:
        logger.debug("No declared name for %s: %s", path, exc)
        return None
    name = (parsed.frontmatter or {}).get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None
