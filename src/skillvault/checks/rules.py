"""Check registry for vault lint rules."""

from __future__ import annotations

import logging

from skillvault.checks.base import Check
from skillvault.checks.commands import CommandGuardMissingCheck
from skillvault.checks.frontmatter import FRONTMATTER_CHECK_CLASSES
from skillvault.checks.links import BrokenLinkCheck
from skillvault.checks.mcp import MCP_CHECK_CLASSES

logger = logging.getLogger(__name__)

CHECK_CLASSES: tuple[type[Check], ...] = (
    *FRONTMATTER_CHECK_CLASSES,
    BrokenLinkCheck,
    CommandGuardMissingCheck,
    *MCP_CHECK_CLASSES,
)


def build_checks(rule_ids: tuple[str, ...]) -> list[Check]:
    """Build check instances for configured rule IDs."""
    known = {check_cls.rule_id: check_cls for check_cls in CHECK_CLASSES}
    checks: list[Check] = []

    for rule_id in rule_ids:
        check_cls = known.get(rule_id)
        if check_cls is None:
            logger.warning("Unknown check ID ignored: %s", rule_id)
            continue
        checks.append(check_cls())

    return checks
