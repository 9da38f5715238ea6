"""Tests for MCP server config parsing and package pointer derivation."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillvault.exceptions import DocumentParseError
from skillvault.parsers import derive_package_pointer, parse_mcp_config_file


def test_parse_fixture_servers_with_lines(basic_vault_root: Path) -> None:
    parsed = parse_mcp_config_file(basic_vault_root / "mcp-servers" / "servers.json")

    by_name = {entry.name: entry for entry in parsed.servers}
    assert list(by_name) == ["filesystem", "github", "remote-search", "orphan"]

    assert by_name["filesystem"].line == 3
    assert by_name["filesystem"].transport == "stdio"
    assert by_name["filesystem"].package == "@modelcontextprotocol/server-filesystem@1.0.2"

    assert by_name["github"].line == 7
    assert by_name["github"].package == "@modelcontextprotocol/server-github"

    assert by_name["remote-search"].transport == "http"
    assert by_name["remote-search"].url == "http://search.example.com/mcp"
    assert by_name["remote-search"].line == 11

    assert by_name["orphan"].transport == "unknown"
    assert by_name["orphan"].command is None
    assert by_name["orphan"].url is None
    assert by_name["orphan"].line == 14


def test_parse_yaml_nested_servers(tmp_path: Path) -> None:
    path = tmp_path / "servers.yaml"
    path.write_text(
        "mcp:\n  servers:\n    events:\n      type: sse\n      url: https://events.example.com/sse\n",
        encoding="utf-8",
    )

    parsed = parse_mcp_config_file(path)

    assert len(parsed.servers) == 1
    assert parsed.servers[0].transport == "sse"
    assert parsed.servers[0].line == 3


def test_parse_servers_key(tmp_path: Path) -> None:
    path = tmp_path / ".mcp.json"
    path.write_text('{"servers": {"local": {"command": "uvx", "args": ["mcp-server-git==0.6.2"]}}}', encoding="utf-8")

    parsed = parse_mcp_config_file(path)

    assert parsed.servers[0].package == "mcp-server-git==0.6.2"


@pytest.mark.parametrize(
    "content",
    ['{"other": {}}', "{not json", "[]"],
    ids=["no-server-mapping", "malformed", "list-payload"],
)
def test_parse_raises_for_unusable_config(tmp_path: Path, content: str) -> None:
    path = tmp_path / "servers.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(DocumentParseError):
        parse_mcp_config_file(path)


@pytest.mark.parametrize(
    ("command", "args", "expected"),
    [
        ("npx", ("-y", "pkg@1.0.0"), "pkg@1.0.0"),
        ("/usr/local/bin/npx", ("--yes", "pkg"), "pkg"),
        ("npx.cmd", ("pkg",), "pkg"),
        ("npx", ("--package=tool@2", "tool"), "tool@2"),
        ("uvx", ("mcp-server-fetch",), "mcp-server-fetch"),
        ("uvx", ("--python", "3.12", "mcp-server-fetch"), "mcp-server-fetch"),
        ("uvx", ("-p", "3.12", "--with", "httpx", "pkg"), "pkg"),
        ("uvx", ("--index-url=https://pypi.example/simple", "pkg"), "pkg"),
        ("uvx", ("--from", "mcp-server-git==0.6.2", "mcp-server-git"), "mcp-server-git==0.6.2"),
        ("npx", ("--registry", "https://npm.example", "pkg"), "pkg"),
        ("npx", ("--cache", "/tmp/npm", "-y", "pkg@2"), "pkg@2"),
        ("npx", ("-p", "tool@3", "tool"), "tool@3"),
        ("pipx", ("run", "--spec", "tool==1.0", "tool"), "tool==1.0"),
        ("pnpm", ("dlx", "pkg"), "pkg"),
        ("pipx", ("run", "tool==1.2"), "tool==1.2"),
        ("npm", ("exec", "pkg"), "pkg"),
        ("npm", ("install", "pkg"), None),
        ("docker", ("run", "-i", "--rm", "-e", "TOKEN", "ghcr.io/org/server:1.4"), "ghcr.io/org/server:1.4"),
        ("docker", ("pull", "image"), None),
        ("node", ("server.js",), None),
        (None, (), None),
    ],
)
def test_derive_package_pointer(command: str | None, args: tuple[str, ...], expected: str | None) -> None:
    assert derive_package_pointer(command, args) == expected
