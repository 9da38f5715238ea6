"""Core data models for Skillvault."""

from .entities import (
    DocEntry,
    DocMap,
    DocumentField,
    DocumentKey,
    DocumentLink,
    Evidence,
    Finding,
    FindingCandidate,
    LintResult,
    McpServerEntry,
    ParsedMarkdownDocument,
    ParsedMcpConfig,
    SeverityOverride,
    Summary,
    TopicLocation,
    VaultDocument,
)

__all__ = [
    "DocEntry",
    "DocMap",
    "DocumentField",
    "DocumentKey",
    "DocumentLink",
    "Evidence",
    "Finding",
    "FindingCandidate",
    "LintResult",
    "McpServerEntry",
    "ParsedMarkdownDocument",
    "ParsedMcpConfig",
    "SeverityOverride",
    "Summary",
    "TopicLocation",
    "VaultDocument",
]
