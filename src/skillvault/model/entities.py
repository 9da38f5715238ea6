"""Frozen dataclasses for parsed documents, findings and lint results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, TypeAlias

from skillvault.types import (
    Classification,
    Confidence,
    DocumentKind,
    JsonObject,
    LocationSource,
    McpTransport,
    Severity,
)

FieldSource: TypeAlias = Literal["prose", "heading", "code_block"]


@dataclass(frozen=True)
class Evidence:
    """Location evidence for a finding."""

    path: str
    line: int | None
    snippet: str


@dataclass(frozen=True)
class DocumentField:
    """A non-blank body line with its 1-based line number."""

    line: int
    value: str
    snippet: str
    in_code_block: bool = False
    field_source: FieldSource = "prose"


@dataclass(frozen=True)
class DocumentKey:
    """A top-level frontmatter key and the line that declares it."""

    key: str
    line: int
    snippet: str


@dataclass(frozen=True)
class DocumentLink:
    """A markdown link found outside code blocks."""

    target: str
    text: str
    line: int
    snippet: str
    is_image: bool = False
    is_reference: bool = False


@dataclass(frozen=True)
class ParsedMarkdownDocument:
    """Markdown document split into frontmatter, body lines and links."""

    file_path: Path
    raw_text: str
    frontmatter: dict[str, Any] | None
    has_frontmatter: bool
    body: str
    fields: tuple[DocumentField, ...]
    keys: tuple[DocumentKey, ...]
    links: tuple[DocumentLink, ...]

    def key_line(self, key: str) -> int | None:
        """Return the line declaring frontmatter *key*, if any."""
        for item in self.keys:
            if item.key == key:
                return item.line
        return None

    def first_heading(self) -> str | None:
        """Return the text of the first level-one heading outside code blocks."""
        for item in self.fields:
            if item.field_source == "heading" and item.value.startswith("# "):
                return item.value[2:].strip().rstrip("#").strip() or None
        return None


@dataclass(frozen=True)
class McpServerEntry:
    """A single MCP server pointer from a config file."""

    name: str
    transport: McpTransport
    command: str | None
    args: tuple[str, ...]
    package: str | None
    url: str | None
    line: int | None
    snippet: str


@dataclass(frozen=True)
class ParsedMcpConfig:
    """An MCP server configuration file."""

    file_path: Path
    raw_text: str
    servers: tuple[McpServerEntry, ...]


@dataclass(frozen=True)
class VaultDocument:
    """A discovered vault document with its parsed content."""

    kind: DocumentKind
    path: Path
    root: Path
    name: str
    markdown: ParsedMarkdownDocument | None = None
    mcp_config: ParsedMcpConfig | None = None

    @property
    def relative_path(self) -> str:
        """Path relative to the vault root in POSIX form."""
        try:
            return self.path.relative_to(self.root).as_posix()
        except ValueError:
            return self.path.as_posix()


@dataclass(frozen=True)
class FindingCandidate:
    """Check output before it is bound to a document and scored."""

    rule_id: str
    score: int
    confidence: Confidence
    title: str
    description: str
    evidence: Evidence
    recommendation: str
    classification: Classification = "error"


@dataclass(frozen=True)
class SeverityOverride:
    """Audit record for a severity changed by a rule override."""

    original: Severity
    applied: Severity
    reason: str


@dataclass(frozen=True)
class Finding:
    """A scored, identified lint finding."""

    id: str
    severity: Severity
    score: int
    confidence: Confidence
    title: str
    description: str
    evidence: Evidence
    document: str
    rule_id: str
    recommendation: str
    kind: DocumentKind = "skill"
    classification: Classification = "error"
    severity_override: SeverityOverride | None = None

    def to_dict(self) -> JsonObject:
        payload: JsonObject = {
            "id": self.id,
            "severity": self.severity,
            "score": self.score,
            "confidence": self.confidence,
            "title": self.title,
            "description": self.description,
            "evidence": {
                "path": self.evidence.path,
                "line": self.evidence.line,
                "snippet": self.evidence.snippet,
            },
            "document": self.document,
            "kind": self.kind,
            "rule_id": self.rule_id,
            "recommendation": self.recommendation,
            "classification": self.classification,
        }
        if self.severity_override is not None:
            payload["severity_override"] = {
                "original": self.severity_override.original,
                "applied": self.severity_override.applied,
                "reason": self.severity_override.reason,
            }
        return payload


@dataclass(frozen=True)
class Summary:
    """Per-document summary written next to its findings."""

    schema_version: str
    document: str
    kind: DocumentKind
    overall_score: int
    overall_severity: Severity
    finding_count: int
    counts_by_severity: dict[Severity, int]
    counts_by_rule: dict[str, int]
    top_issues: tuple[JsonObject, ...]
    shown_finding_count: int | None = None
    output_filter: dict[str, object] | None = None
    rule_overrides: dict[str, dict[str, Severity]] | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "schema_version": self.schema_version,
            "document": self.document,
            "kind": self.kind,
            "overall_score": self.overall_score,
            "overall_severity": self.overall_severity,
            "finding_count": self.finding_count,
            "counts": {
                "by_severity": dict(self.counts_by_severity),
                "by_rule": dict(self.counts_by_rule),
            },
            "top_issues": list(self.top_issues),
        }
        if self.shown_finding_count is not None:
            payload["shown_finding_count"] = self.shown_finding_count
        if self.output_filter is not None:
            payload["output_filter"] = self.output_filter
        if self.rule_overrides:
            payload["rule_overrides"] = self.rule_overrides
        return payload


@dataclass(frozen=True)
class LintResult:
    """Aggregate result of a vault lint run."""

    scanned_files: int
    total_findings: int
    aggregate_score: int
    aggregate_severity: Severity
    counts_by_severity: dict[Severity, int]
    findings: tuple[Finding, ...]
    duration_seconds: float
    warnings: tuple[str, ...] = ()
    cache_hits: int = 0
    cache_misses: int = 0
    counts_by_kind: dict[str, int] = field(default_factory=dict)
    counts_by_rule: dict[str, int] = field(default_factory=dict)
    active_rule_overrides: dict[str, dict[str, Severity]] = field(default_factory=dict)


@dataclass(frozen=True)
class DocEntry:
    """A documentation file indexed by the doc scanner."""

    path: str
    topic: str
    title: str | None = None
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class DocMap:
    """Topic to file-location map produced by ``scan_docs``."""

    root: Path
    topics: dict[str, tuple[str, ...]]
    documents: tuple[DocEntry, ...]

    def paths_for(self, topic: str) -> tuple[str, ...]:
        """Return indexed paths for a normalized topic."""
        return self.topics.get(topic, ())

    def to_dict(self, *, schema_version: str) -> dict[str, object]:
        return {
            "schema_version": schema_version,
            "root": self.root.as_posix(),
            "topics": {topic: list(paths) for topic, paths in sorted(self.topics.items())},
            "documents": [
                {
                    "path": entry.path,
                    "topic": entry.topic,
                    "title": entry.title,
                    "aliases": list(entry.aliases),
                }
                for entry in self.documents
            ],
        }


@dataclass(frozen=True)
class TopicLocation:
    """Result of resolving a topic to a documentation file."""

    requested: str
    topic: str
    path: Path | None
    source: LocationSource
    tried: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.path is not None

    def to_dict(self, root: Path) -> dict[str, object]:
        rendered: str | None = None
        if self.path is not None:
            try:
                rendered = self.path.relative_to(root).as_posix()
            except ValueError:
                rendered = self.path.as_posix()
        return {
            "requested": self.requested,
            "topic": self.topic,
            "path": rendered,
            "source": self.source,
            "tried": list(self.tried),
        }
