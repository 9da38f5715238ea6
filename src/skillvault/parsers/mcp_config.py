"""Parser for MCP server configuration files (``mcpServers`` JSON/YAML)."""

from __future__ import annotations

import json
import re
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from skillvault.constants.parsing import (
    DOCKER_COMMAND,
    DOCKER_VALUE_FLAGS,
    MCP_NESTED_SERVER_PATH,
    MCP_SERVER_KEYS,
    MCP_TRANSPORT_ALIASES,
    PACKAGE_RUNNER_COMMANDS,
    PACKAGE_RUNNER_PACKAGE_FLAGS,
    PACKAGE_RUNNER_SUBCOMMANDS,
    PACKAGE_RUNNER_VALUE_FLAGS,
    SNIPPET_MAX_LENGTH,
)
from skillvault.exceptions import DocumentParseError
from skillvault.model import McpServerEntry, ParsedMcpConfig
from skillvault.types import McpTransport


def parse_mcp_config_file(path: Path) -> ParsedMcpConfig:
    """Parse an MCP server config file and extract one pointer per server."""
    try:
        raw_text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentParseError(f"File is not valid UTF-8: {path}") from exc

    payload = _load_payload(raw_text, path)
    servers_raw = _locate_servers(payload)
    if servers_raw is None:
        raise DocumentParseError(
            f"MCP config {path} has no server mapping (expected one of: "
            f"{', '.join(MCP_SERVER_KEYS)}, {'.'.join(MCP_NESTED_SERVER_PATH)})"
        )

    lines = raw_text.lstrip("\ufeff").splitlines()
    servers = tuple(
        _build_entry(str(name), value, lines) for name, value in servers_raw.items()
    )
    return ParsedMcpConfig(file_path=path, raw_text=raw_text, servers=servers)


def derive_package_pointer(command: str | None, args: tuple[str, ...]) -> str | None:
    """Return the package or image a launcher command runs, if recognizable."""
    if not command:
        return None
    executable = PurePosixPath(command.replace("\\", "/")).name.lower()
    for suffix in (".cmd", ".exe"):
        executable = executable.removesuffix(suffix)

    remaining = list(args)
    if executable in PACKAGE_RUNNER_SUBCOMMANDS:
        subcommands = PACKAGE_RUNNER_SUBCOMMANDS[executable]
        if remaining and remaining[0] in subcommands:
            remaining = remaining[1:]
        elif executable not in PACKAGE_RUNNER_COMMANDS:
            return None
    elif executable not in PACKAGE_RUNNER_COMMANDS:
        if executable == DOCKER_COMMAND:
            return _docker_image(remaining)
        return None

    return _runner_package(executable, remaining)


def _load_payload(raw_text: str, path: Path) -> Any:
    text = raw_text.lstrip("\ufeff")
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text) if text.strip() else None
        except json.JSONDecodeError as exc:
            raise DocumentParseError(f"Invalid JSON in {path}: {exc}") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DocumentParseError(f"Invalid YAML in {path}: {exc}") from exc


def _locate_servers(payload: Any) -> dict[Any, Any] | None:
    if not isinstance(payload, dict):
        return None
    for key in MCP_SERVER_KEYS:
        value = payload.get(key)
        if isinstance(value, dict):
            return value
    parent_key, child_key = MCP_NESTED_SERVER_PATH
    parent = payload.get(parent_key)
    if isinstance(parent, dict) and isinstance(parent.get(child_key), dict):
        return parent[child_key]
    return None


def _build_entry(name: str, value: Any, lines: list[str]) -> McpServerEntry:
    line = _find_key_line(lines, name)
    snippet = lines[line - 1].strip()[:SNIPPET_MAX_LENGTH] if line is not None else name
    if not isinstance(value, dict):
        value = {}

    command = value.get("command")
    command = command.strip() if isinstance(command, str) and command.strip() else None

    raw_args = value.get("args")
    args: tuple[str, ...] = ()
    if isinstance(raw_args, (list, tuple)):
        args = tuple(str(arg) for arg in raw_args)

    url = value.get("url") or value.get("serverUrl")
    url = url.strip() if isinstance(url, str) and url.strip() else None

    return McpServerEntry(
        name=name,
        transport=_resolve_transport(value, command=command, url=url),
        command=command,
        args=args,
        package=derive_package_pointer(command, args),
        url=url,
        line=line,
        snippet=snippet,
    )


def _resolve_transport(value: dict[Any, Any], *, command: str | None, url: str | None) -> McpTransport:
    declared = value.get("type") or value.get("transport")
    if isinstance(declared, str):
        alias = MCP_TRANSPORT_ALIASES.get(declared.strip().lower())
        if alias is not None:
            return alias  # type: ignore[return-value]
    if command:
        return "stdio"
    if url:
        return "sse" if url.rstrip("/").endswith("/sse") else "http"
    return "unknown"


def _find_key_line(lines: list[str], name: str) -> int | None:
    pattern = re.compile(rf"^\s*[\"']?{re.escape(name)}[\"']?\s*:")
    for index, line in enumerate(lines):
        if pattern.match(line):
            return index + 1
    return None


def _runner_package(executable: str, args: list[str]) -> str | None:
    """First positional argument, unless a package option names the package first."""
    package_flags = PACKAGE_RUNNER_PACKAGE_FLAGS.get(executable, frozenset())
    value_flags = PACKAGE_RUNNER_VALUE_FLAGS.get(executable, frozenset())
    iterator = iter(args)
    for arg in iterator:
        if not arg.startswith("-"):
            return arg
        flag, separator, value = arg.partition("=")
        if flag in package_flags:
            return (value if separator else next(iterator, "")) or None
        if flag in value_flags and not separator:
            next(iterator, None)
    return None


def _docker_image(args: list[str]) -> str | None:
    if "run" not in args:
        return None
    after_run = args[args.index("run") + 1 :]
    skip_next = False
    for arg in after_run:
        if skip_next:
            skip_next = False
            continue
        if arg.startswith("-"):
            if arg in DOCKER_VALUE_FLAGS:
                skip_next = True
            continue
        return arg
    return None
