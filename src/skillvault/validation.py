"""Preflight shared by ``skillvault lint`` and ``skillvault validate-config``."""

from __future__ import annotations

from pathlib import Path

from skillvault.config import validate_config_file
from skillvault.constants.validation import CFG010
from skillvault.exceptions.validation import ValidationError, sort_errors


def preflight_validate(root: Path, config_path: Path | None = None) -> list[ValidationError]:
    """Check that *root* is a directory and its config is valid.

    A missing root short-circuits config validation, since the default
    config path lives under it. The result is sorted and empty when the
    run may proceed.
    """
    vault = root.resolve()
    if not vault.is_dir():
        missing = ValidationError(code=CFG010, path=str(vault), field="", message=f"root directory does not exist: {vault}")
        return [missing]
    return sort_errors(validate_config_file(vault, config_path, config_explicit=config_path is not None))
