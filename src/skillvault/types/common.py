"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

Severity: TypeAlias = Literal["low", "medium", "high"]
Confidence: TypeAlias = Literal["low", "medium", "high"]
Classification: TypeAlias = Literal["error", "informational"]
DocumentKind: TypeAlias = Literal["skill", "command", "mcp_server"]
McpTransport: TypeAlias = Literal["stdio", "http", "sse", "unknown"]
LocationSource: TypeAlias = Literal["table", "doc_map", "fallback", "missing"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
