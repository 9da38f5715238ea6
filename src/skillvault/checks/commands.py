"""Invocation-guard check for slash-command templates."""

from __future__ import annotations

import re

from skillvault.checks.base import Check
from skillvault.checks.common import document_evidence
from skillvault.config import VaultConfig
from skillvault.constants.checks import COMMAND_GUARD_MISSING_SCORE
from skillvault.model import FindingCandidate, ParsedMarkdownDocument, VaultDocument


class CommandGuardMissingCheck(Check):
    """Flag command templates that never state when they may be invoked.

    A guard is either a configured frontmatter key (``argument-hint``,
    ``disable-model-invocation``...) or a body line outside code blocks
    matching one of the configured guard patterns.
    """

    rule_id = "COMMAND_GUARD_MISSING"
    kinds = frozenset({"command"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        parsed = document.markdown
        if parsed is None or has_invocation_guard(parsed, config):
            return []

        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=COMMAND_GUARD_MISSING_SCORE,
                confidence="medium",
                title="Command invocation guard missing",
                description="Command declares no guard frontmatter key and no guard instruction.",
                evidence=document_evidence(document, line=1),
                recommendation=(
                    "Declare `argument-hint` or `disable-model-invocation` in frontmatter, "
                    "or state in the body when the command may run."
                ),
            )
        ]


def has_invocation_guard(parsed: ParsedMarkdownDocument, config: VaultConfig) -> bool:
    """Return True when frontmatter keys or body text declare an invocation guard."""
    frontmatter = parsed.frontmatter or {}
    if any(key in frontmatter for key in config.command_guard.keys):
        return True
    patterns = [re.compile(pattern) for pattern in config.command_guard.patterns]
    return any(
        pattern.search(field.value) for field in parsed.fields if not field.in_code_block for pattern in patterns
    )
