"""Shared type aliases for Skillvault."""

from .cache import CacheFileEntry, CachePayload
from .common import (
    Classification,
    Confidence,
    DocumentKind,
    JsonObject,
    JsonScalar,
    JsonValue,
    LocationSource,
    McpTransport,
    Severity,
)
from .config import CheckConfig, CommandGuardConfig, DocsScanConfig, LinkCheckConfig, RuleOverrideConfig
from .scanner import DiscoveredDocument

__all__ = [
    "CacheFileEntry",
    "CachePayload",
    "CheckConfig",
    "Classification",
    "CommandGuardConfig",
    "Confidence",
    "DiscoveredDocument",
    "DocsScanConfig",
    "DocumentKind",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "LinkCheckConfig",
    "LocationSource",
    "McpTransport",
    "RuleOverrideConfig",
    "Severity",
]
