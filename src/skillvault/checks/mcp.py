"""Pointer checks for MCP server configuration entries."""

from __future__ import annotations

from urllib.parse import urlparse

from skillvault.checks.base import Check
from skillvault.checks.common import is_pinned_package
from skillvault.config import VaultConfig
from skillvault.constants.checks import (
    LOOPBACK_HOSTS,
    MCP_INSECURE_URL_SCHEMES,
    MCP_INSECURE_URL_SCORE,
    MCP_POINTER_MISSING_SCORE,
    MCP_UNPINNED_PACKAGE_SCORE,
    MCP_URL_INVALID_SCORE,
    MCP_VALID_URL_SCHEMES,
)
from skillvault.model import Evidence, FindingCandidate, McpServerEntry, VaultDocument


def _entry_evidence(document: VaultDocument, entry: McpServerEntry) -> Evidence:
    return Evidence(path=document.relative_path, line=entry.line, snippet=entry.snippet)


class McpPointerMissingCheck(Check):
    """Flag server entries that point nowhere."""

    rule_id = "MCP_POINTER_MISSING"
    kinds = frozenset({"mcp_server"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        if document.mcp_config is None:
            return []
        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=MCP_POINTER_MISSING_SCORE,
                confidence="high",
                title="MCP server pointer missing",
                description=f"Server '{entry.name}' declares neither a command nor a URL.",
                evidence=_entry_evidence(document, entry),
                recommendation="Point the entry at a launch command (`command`/`args`) or a remote `url`.",
            )
            for entry in document.mcp_config.servers
            if entry.command is None and entry.url is None
        ]


class McpUrlInvalidCheck(Check):
    """Flag remote server URLs that cannot be connected to."""

    rule_id = "MCP_URL_INVALID"
    kinds = frozenset({"mcp_server"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        if document.mcp_config is None:
            return []
        candidates: list[FindingCandidate] = []
        for entry in document.mcp_config.servers:
            if entry.url is None or _is_valid_url(entry.url):
                continue
            candidates.append(
                FindingCandidate(
                    rule_id=self.rule_id,
                    score=MCP_URL_INVALID_SCORE,
                    confidence="high",
                    title="MCP server URL invalid",
                    description=f"Server '{entry.name}' URL '{entry.url}' is not an http(s) or ws(s) URL with a host.",
                    evidence=_entry_evidence(document, entry),
                    recommendation="Use a full URL such as `https://host.example/mcp`.",
                )
            )
        return candidates


class McpInsecureUrlCheck(Check):
    """Flag plaintext remote server URLs that leave the local machine."""

    rule_id = "MCP_INSECURE_URL"
    kinds = frozenset({"mcp_server"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        if document.mcp_config is None:
            return []
        candidates: list[FindingCandidate] = []
        for entry in document.mcp_config.servers:
            if entry.url is None or not _is_valid_url(entry.url):
                continue
            parsed = urlparse(entry.url)
            host = (parsed.hostname or "").lower()
            if parsed.scheme.lower() not in MCP_INSECURE_URL_SCHEMES or host in LOOPBACK_HOSTS:
                continue
            candidates.append(
                FindingCandidate(
                    rule_id=self.rule_id,
                    score=MCP_INSECURE_URL_SCORE,
                    confidence="high",
                    title="MCP server URL unencrypted",
                    description=f"Server '{entry.name}' is reached over plaintext {parsed.scheme} at '{host}'.",
                    evidence=_entry_evidence(document, entry),
                    recommendation="Use https/wss for servers that are not on the local machine.",
                )
            )
        return candidates


class McpUnpinnedPackageCheck(Check):
    """Flag launched packages that float to whatever version is newest."""

    rule_id = "MCP_UNPINNED_PACKAGE"
    kinds = frozenset({"mcp_server"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        if document.mcp_config is None:
            return []
        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=MCP_UNPINNED_PACKAGE_SCORE,
                confidence="medium",
                title="MCP server package not pinned",
                description=f"Server '{entry.name}' runs '{entry.package}' without a version pin.",
                evidence=_entry_evidence(document, entry),
                recommendation="Pin the package (`pkg@1.2.3`, `pkg==1.2.3` or `image:tag`) for reproducible setups.",
                classification="informational",
            )
            for entry in document.mcp_config.servers
            if entry.package is not None and not is_pinned_package(entry.package)
        ]


def _is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme.lower() in MCP_VALID_URL_SCHEMES and bool(hostname)


MCP_CHECK_CLASSES: tuple[type[Check], ...] = (
    McpPointerMissingCheck,
    McpUrlInvalidCheck,
    McpInsecureUrlCheck,
    McpUnpinnedPackageCheck,
)
