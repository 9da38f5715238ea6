"""Shared pytest fixtures for repository-local test data."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def basic_vault_root(fixtures_root: Path) -> Path:
    """Return the primary fixture vault path."""
    return fixtures_root / "vaults" / "basic"


@pytest.fixture()
def vault_copy(basic_vault_root: Path, tmp_path: Path) -> Path:
    """Return a writable copy of the fixture vault."""
    target = tmp_path / "vault"
    shutil.copytree(basic_vault_root, target)
    return target
