"""Tests for relative link resolution and the broken-link check."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillvault.checks import link_target_states, resolve_link_target
from skillvault.checks.links import BrokenLinkCheck
from skillvault.config import VaultConfig
from skillvault.model import VaultDocument
from skillvault.parsers import parse_vault_markdown_file
from skillvault.types import LinkCheckConfig


def _document(root: Path, relative: str, content: str) -> VaultDocument:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return VaultDocument(kind="skill", path=path, root=root, name="doc", markdown=parse_vault_markdown_file(path))


@pytest.mark.parametrize(
    "target",
    ["#section", "https://example.com/x.md", "mailto:team@example.com", "//cdn.example.com/a.png", "  "],
)
def test_resolve_link_target_skips_non_local(tmp_path: Path, target: str) -> None:
    assert resolve_link_target(target, source=tmp_path / "a.md", root=tmp_path) is None


def test_resolve_link_target_strips_fragment_query_and_decodes(tmp_path: Path) -> None:
    source = tmp_path / "skills" / "a" / "SKILL.md"

    resolved = resolve_link_target("my%20notes.md?raw=1#top", source=source, root=tmp_path)

    assert resolved == (tmp_path / "skills" / "a" / "my notes.md").resolve()


def test_resolve_link_target_root_relative(tmp_path: Path) -> None:
    source = tmp_path / "skills" / "a" / "SKILL.md"

    resolved = resolve_link_target("/docs/guide.md", source=source, root=tmp_path)

    assert resolved == (tmp_path / "docs" / "guide.md").resolve()


def test_resolve_link_target_ignore_patterns(tmp_path: Path) -> None:
    resolved = resolve_link_target("templates/x.md", source=tmp_path / "a.md", root=tmp_path, ignore=("templates/*",))

    assert resolved is None


def test_broken_link_check_on_fixture(basic_vault_root: Path) -> None:
    path = basic_vault_root / "skills" / "broken-skill" / "SKILL.md"
    document = VaultDocument(
        kind="skill",
        path=path,
        root=basic_vault_root,
        name="broken-skill",
        markdown=parse_vault_markdown_file(path),
    )

    candidates = BrokenLinkCheck().run(document=document, config=VaultConfig())

    assert [c.description for c in candidates] == [
        "Link target 'guide.md' does not exist.",
        "Image target 'images/flow.png' does not exist.",
    ]
    assert {c.evidence.line for c in candidates} == {9}
    assert candidates[0].evidence.path == "skills/broken-skill/SKILL.md"


def test_broken_link_check_accepts_existing_files_and_directories(tmp_path: Path) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("# Guide\n", encoding="utf-8")
    document = _document(tmp_path, "README.md", "[guide](docs/guide.md) [dir](docs/) [top](#top)\n")

    assert BrokenLinkCheck().run(document=document, config=VaultConfig()) == []


def test_broken_link_check_can_skip_images(tmp_path: Path) -> None:
    document = _document(tmp_path, "a.md", "![logo](missing.png)\n")
    config = VaultConfig(links=LinkCheckConfig(check_images=False))

    assert BrokenLinkCheck().run(document=document, config=config) == []
    assert link_target_states(document, config) == {}


def test_link_target_states_records_existence(tmp_path: Path) -> None:
    (tmp_path / "present.md").write_text("x\n", encoding="utf-8")
    document = _document(tmp_path, "a.md", "[a](present.md) [b](absent.md) [c](https://example.com)\n")

    states = link_target_states(document, VaultConfig())

    assert states == {
        str((tmp_path / "present.md").resolve()): True,
        str((tmp_path / "absent.md").resolve()): False,
    }


@pytest.mark.parametrize("target", ["a%00b.md", "n" * 300 + ".md"])
def test_unresolvable_link_targets_are_broken(tmp_path: Path, target: str) -> None:
    document = _document(tmp_path, "a.md", f"[x]({target})\n")
    config = VaultConfig()

    candidates = BrokenLinkCheck().run(document=document, config=config)

    assert [c.rule_id for c in candidates] == ["BROKEN_LINK"]
    assert candidates[0].evidence.line == 1
    assert list(link_target_states(document, config).values()) == [False]
