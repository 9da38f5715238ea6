"""Topic to documentation-path lookup with existence checks and fallback."""

from __future__ import annotations

import logging
from pathlib import Path

from skillvault.constants.config import DEFAULT_MAX_FILE_MB
from skillvault.constants.docs import DEFAULT_TOPIC_TABLE, FALLBACK_TOPIC, TOPIC_ALIASES
from skillvault.docs.scanner import scan_docs
from skillvault.model import DocMap, TopicLocation
from skillvault.types import DocsScanConfig
from skillvault.utils import normalize_topic

logger = logging.getLogger(__name__)


class DocNavigator:
    """Resolve documentation topics to files that exist under a root.

    Lookup order for a topic: the conventional paths in the topic table,
    then the paths found by scanning the root, then the fallback topic's
    table paths. Configured topic paths are tried before the built-in ones.
    """

    def __init__(
        self,
        root: Path,
        *,
        topics: dict[str, tuple[str, ...]] | None = None,
        doc_map: DocMap | None = None,
        docs_config: DocsScanConfig | None = None,
        max_file_mb: int = DEFAULT_MAX_FILE_MB,
    ) -> None:
        self._root = root.resolve()
        self._table = build_topic_table(topics)
        self._doc_map = doc_map
        self._docs_config = docs_config or DocsScanConfig()
        self._max_file_mb = max_file_mb

    @property
    def root(self) -> Path:
        return self._root

    @property
    def topics(self) -> tuple[str, ...]:
        """Table topics in sorted order."""
        return tuple(sorted(self._table))

    @property
    def doc_map(self) -> DocMap:
        """The scanned doc map, built on first use."""
        if self._doc_map is None:
            self._doc_map = scan_docs(
                self._root,
                extensions=self._docs_config.extensions,
                exclude_dirs=self._docs_config.exclude_dirs,
                max_file_mb=self._max_file_mb,
            )
        return self._doc_map

    def canonical_topic(self, topic: str) -> str:
        """Normalize *topic* and resolve aliases not shadowed by a table row."""
        normalized = normalize_topic(topic)
        if normalized in self._table:
            return normalized
        return TOPIC_ALIASES.get(normalized, normalized)

    def locate(self, topic: str, *, allow_fallback: bool = True) -> TopicLocation:
        """Resolve a topic to an existing file, falling back to the readme topic."""
        normalized = normalize_topic(topic)
        canonical = self.canonical_topic(topic)
        tried: list[str] = []

        path = self._first_existing(self._table.get(canonical, ()), tried)
        if path is not None:
            return TopicLocation(requested=topic, topic=canonical, path=path, source="table", tried=tuple(tried))

        for key in dict.fromkeys((canonical, normalized)):
            path = self._first_existing(self.doc_map.paths_for(key), tried)
            if path is not None:
                return TopicLocation(requested=topic, topic=canonical, path=path, source="doc_map", tried=tuple(tried))

        if allow_fallback and canonical != FALLBACK_TOPIC:
            path = self._first_existing(self._table.get(FALLBACK_TOPIC, ()), tried)
            if path is not None:
                logger.info("Topic %r not found; falling back to %s", topic, FALLBACK_TOPIC)
                return TopicLocation(
                    requested=topic,
                    topic=canonical,
                    path=path,
                    source="fallback",
                    tried=tuple(tried),
                )

        logger.info("Topic %r not found under %s", topic, self._root)
        return TopicLocation(requested=topic, topic=canonical, path=None, source="missing", tried=tuple(tried))

    def locate_all(self, *, allow_fallback: bool = True) -> list[TopicLocation]:
        """Resolve every table topic in sorted order."""
        return [self.locate(topic, allow_fallback=allow_fallback) for topic in self.topics]

    def _first_existing(self, candidates: tuple[str, ...], tried: list[str]) -> Path | None:
        for candidate in candidates:
            if candidate in tried:
                continue
            tried.append(candidate)
            path = self._root / candidate
            if path.is_file():
                return path
        return None


def build_topic_table(overrides: dict[str, tuple[str, ...]] | None = None) -> dict[str, tuple[str, ...]]:
    """Merge configured topic paths ahead of the built-in table rows."""
    table = dict(DEFAULT_TOPIC_TABLE)
    for raw_topic, paths in (overrides or {}).items():
        topic = normalize_topic(raw_topic)
        if not topic:
            continue
        existing = table.get(topic, ())
        table[topic] = tuple(dict.fromkeys((*paths, *existing)))
    return table
