"""Tests for topic lookup with fallback."""

from __future__ import annotations

from pathlib import Path

from skillvault.docs import DocNavigator, build_topic_table
from skillvault.model import DocMap


def test_locate_uses_topic_table_alias(basic_vault_root: Path) -> None:
    location = DocNavigator(basic_vault_root).locate("Design")

    assert location.topic == "architecture"
    assert location.source == "table"
    assert location.path == basic_vault_root.resolve() / "docs" / "architecture.md"
    assert location.tried == ("ARCHITECTURE.md", "docs/architecture.md")


def test_locate_falls_through_to_doc_map(basic_vault_root: Path) -> None:
    location = DocNavigator(basic_vault_root).locate("guides")

    assert location.source == "doc_map"
    assert location.to_dict(basic_vault_root.resolve())["path"] == "docs/guides/README.md"


def test_locate_doc_map_by_requested_name_after_alias(basic_vault_root: Path) -> None:
    location = DocNavigator(basic_vault_root).locate("reference")

    assert location.topic == "api"
    assert location.source == "doc_map"
    assert location.path == basic_vault_root.resolve() / "skills" / "pdf-tools" / "reference.md"


def test_locate_falls_back_to_readme(basic_vault_root: Path) -> None:
    location = DocNavigator(basic_vault_root).locate("deployment")

    assert location.source == "fallback"
    assert location.found
    assert location.path == basic_vault_root.resolve() / "README.md"
    assert location.tried[-1] == "README.md"
    assert "docs/deployment.md" in location.tried


def test_locate_without_fallback_reports_missing(basic_vault_root: Path) -> None:
    location = DocNavigator(basic_vault_root).locate("deployment", allow_fallback=False)

    assert location.source == "missing"
    assert not location.found
    assert location.to_dict(basic_vault_root)["path"] is None


def test_locate_missing_when_fallback_absent(tmp_path: Path) -> None:
    location = DocNavigator(tmp_path).locate("security")

    assert location.source == "missing"
    assert "SECURITY.md" in location.tried
    assert "README.md" in location.tried


def test_configured_topics_take_precedence(tmp_path: Path) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "architecture.md").write_text("# Architecture\n", encoding="utf-8")
    (tmp_path / "DESIGN.md").write_text("# Design\n", encoding="utf-8")

    navigator = DocNavigator(tmp_path, topics={"architecture": ("DESIGN.md",), "Runbook": ("ops/runbook.md",)})

    assert navigator.locate("architecture").path == tmp_path.resolve() / "DESIGN.md"
    assert "runbook" in navigator.topics


def test_configured_topic_shadows_builtin_alias(tmp_path: Path) -> None:
    (tmp_path / "DESIGN.md").write_text("# Design\n", encoding="utf-8")

    navigator = DocNavigator(tmp_path, topics={"design": ("DESIGN.md",)})

    assert navigator.canonical_topic("design") == "design"
    assert navigator.locate("design").source == "table"


def test_prebuilt_doc_map_skips_scanning(tmp_path: Path) -> None:
    (tmp_path / "notes").mkdir()
    (tmp_path / "notes" / "ideas.md").write_text("x\n", encoding="utf-8")
    doc_map = DocMap(root=tmp_path, topics={"ideas": ("notes/ideas.md",)}, documents=())

    navigator = DocNavigator(tmp_path, doc_map=doc_map)

    assert navigator.doc_map is doc_map
    assert navigator.locate("ideas").source == "doc_map"


def test_locate_all_covers_table_topics(basic_vault_root: Path) -> None:
    locations = DocNavigator(basic_vault_root).locate_all(allow_fallback=False)
    by_topic = {location.topic: location for location in locations}

    assert [location.requested for location in locations] == sorted(build_topic_table())
    assert by_topic["readme"].source == "table"
    assert by_topic["architecture"].source == "table"
    assert by_topic["security"].source == "missing"


def test_build_topic_table_merges_without_duplicates() -> None:
    table = build_topic_table({"readme": ("docs/README.md", "START.md"), "  ": ("x.md",)})

    assert table["readme"][:2] == ("docs/README.md", "START.md")
    assert table["readme"].count("docs/README.md") == 1
    assert "" not in table
