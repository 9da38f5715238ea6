"""Documentation directory walker producing a topic to file map."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from skillvault.constants.config import DEFAULT_MAX_FILE_MB
from skillvault.constants.discovery import MARKDOWN_SUFFIXES
from skillvault.constants.docs import (
    DEFAULT_DOC_EXTENSIONS,
    DEFAULT_EXCLUDE_DIRS,
    DOC_MAP_SCHEMA_VERSION,
    INDEX_STEMS,
)
from skillvault.exceptions import DocumentParseError
from skillvault.io import relative_posix, write_json_atomic
from skillvault.model import DocEntry, DocMap
from skillvault.parsers import parse_vault_markdown_file
from skillvault.utils import normalize_topic

logger = logging.getLogger(__name__)


def scan_docs(
    root: Path,
    *,
    extensions: tuple[str, ...] = DEFAULT_DOC_EXTENSIONS,
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS,
    max_file_mb: int = DEFAULT_MAX_FILE_MB,
) -> DocMap:
    """Walk *root* and index documentation files by topic.

    Excluded directories are pruned during the walk, so nothing beneath
    them is visited. Each file contributes its primary topic and any aliases
    taken from its frontmatter ``name`` or first level-one heading. Topic
    path lists are sorted root-relative POSIX paths.
    """
    root = root.resolve()
    allowed_suffixes = {extension.lower() for extension in extensions}
    excluded = set(exclude_dirs)
    size_limit_bytes = max_file_mb * 1024 * 1024

    entries: list[DocEntry] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in excluded)
        current = Path(dirpath)
        for filename in sorted(filenames):
            path = current / filename
            if path.suffix.lower() not in allowed_suffixes or not path.is_file():
                continue
            try:
                if path.stat().st_size > size_limit_bytes:
                    logger.info("Skipping %s: larger than %d MB", path, max_file_mb)
                    continue
            except OSError as exc:
                logger.warning("Cannot stat %s: %s", path, exc)
                continue
            entries.append(_index_file(path, root))

    topics: dict[str, set[str]] = {}
    for entry in entries:
        for topic in (entry.topic, *entry.aliases):
            topics.setdefault(topic, set()).add(entry.path)

    doc_map = DocMap(
        root=root,
        topics={topic: tuple(sorted(paths)) for topic, paths in sorted(topics.items())},
        documents=tuple(sorted(entries, key=lambda entry: entry.path)),
    )
    logger.debug("Indexed %d documents under %d topics", len(doc_map.documents), len(doc_map.topics))
    return doc_map


def write_doc_map(path: Path, doc_map: DocMap) -> None:
    """Persist a doc map as JSON atomically."""
    write_json_atomic(path=path, payload=doc_map.to_dict(schema_version=DOC_MAP_SCHEMA_VERSION))


def derive_topic(path: Path, root: Path) -> str:
    """Return the primary topic for a documentation file.

    Index-like files such as ``README.md`` describe their folder and take
    its name; at the root they keep their own stem.
    """
    stem = normalize_topic(path.stem)
    if stem in INDEX_STEMS and path.parent != root:
        folder = normalize_topic(path.parent.name)
        if folder:
            return folder
    return stem or normalize_topic(path.name)


def _index_file(path: Path, root: Path) -> DocEntry:
    relative = relative_posix(path, root)
    topic = derive_topic(path, root)
    if path.suffix.lower() not in MARKDOWN_SUFFIXES:
        return DocEntry(path=relative, topic=topic)

    try:
        parsed = parse_vault_markdown_file(path)
    except (OSError, DocumentParseError) as exc:
        logger.warning("Indexing %s by file name only: %s", relative, exc)
        return DocEntry(path=relative, topic=topic)

    title = parsed.first_heading()
    declared_name = parsed.frontmatter.get("name") if parsed.frontmatter else None

    aliases: list[str] = []
    for candidate in (declared_name, title):
        if not isinstance(candidate, str):
            continue
        alias = normalize_topic(candidate)
        if alias and alias != topic and alias not in aliases:
            aliases.append(alias)

    return DocEntry(path=relative, topic=topic, title=title, aliases=tuple(aliases))
