"""Constants for markdown and MCP config parsing."""

from __future__ import annotations

import re

FRONTMATTER_DELIMITER: str = "---"
FRONTMATTER_ALT_DELIMITER: str = "..."
SNIPPET_MAX_LENGTH: int = 200

FENCED_CODE_BLOCK_PATTERN: re.Pattern[str] = re.compile(r"^(`{3,}|~{3,})")
FRONTMATTER_KEY_PATTERN: re.Pattern[str] = re.compile(r"^([A-Za-z0-9_][A-Za-z0-9_.-]*)\s*:")
HEADING_PATTERN: re.Pattern[str] = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
INLINE_CODE_PATTERN: re.Pattern[str] = re.compile(r"`+[^`]*`+")

# [text](target "title") and ![alt](<target with spaces>)
INLINE_LINK_PATTERN: re.Pattern[str] = re.compile(
    r"(!?)\[((?:[^\[\]]|\[[^\[\]]*\])*)\]\(\s*(<[^>]*>|[^)\s]+)(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
REFERENCE_DEFINITION_PATTERN: re.Pattern[str] = re.compile(r"^\s{0,3}\[([^\]]+)\]:\s*(<[^>]*>|\S+)")

MCP_SERVER_KEYS: tuple[str, ...] = ("mcpServers", "servers")
MCP_NESTED_SERVER_PATH: tuple[str, str] = ("mcp", "servers")

# Launchers whose first positional argument names the package being run.
PACKAGE_RUNNER_COMMANDS: frozenset[str] = frozenset({"npx", "uvx", "bunx", "pipx"})
PACKAGE_RUNNER_SUBCOMMANDS: dict[str, frozenset[str]] = {
    "pnpm": frozenset({"dlx"}),
    "pipx": frozenset({"run"}),
    "npm": frozenset({"exec"}),
}
# Runner options whose value names the package itself.
PACKAGE_RUNNER_PACKAGE_FLAGS: dict[str, frozenset[str]] = {
    "npx": frozenset({"-p", "--package"}),
    "npm": frozenset({"-p", "--package"}),
    "pnpm": frozenset({"--package"}),
    "bunx": frozenset({"-p", "--package"}),
    "uvx": frozenset({"--from"}),
    "pipx": frozenset({"--spec"}),
}
# Runner options that consume the next argument.
PACKAGE_RUNNER_VALUE_FLAGS: dict[str, frozenset[str]] = {
    "npx": frozenset({"--registry", "--cache", "--userconfig", "-c", "--call", "-w", "--workspace"}),
    "npm": frozenset({"--registry", "--cache", "--userconfig", "-c", "--call", "-w", "--workspace"}),
    "pnpm": frozenset({"--registry", "-C", "--dir"}),
    "uvx": frozenset(
        {
            "--python",
            "-p",
            "--with",
            "-w",
            "--with-editable",
            "--with-requirements",
            "--index",
            "--index-url",
            "-i",
            "--extra-index-url",
            "--default-index",
            "--cache-dir",
            "--constraints",
            "-c",
        }
    ),
    "pipx": frozenset({"--python", "--index-url", "-i", "--pip-args"}),
}
DOCKER_COMMAND: str = "docker"
DOCKER_VALUE_FLAGS: frozenset[str] = frozenset(
    {
        "-e",
        "--env",
        "--env-file",
        "-v",
        "--volume",
        "--mount",
        "-p",
        "--publish",
        "--name",
        "--network",
        "-w",
        "--workdir",
        "--entrypoint",
        "-u",
        "--user",
        "--platform",
    }
)

MCP_TRANSPORT_ALIASES: dict[str, str] = {
    "stdio": "stdio",
    "http": "http",
    "streamable-http": "http",
    "streamable_http": "http",
    "streamablehttp": "http",
    "sse": "sse",
}
