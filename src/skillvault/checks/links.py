"""Relative link checks for markdown documents."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from skillvault.checks.base import Check
from skillvault.checks.common import field_evidence, resolve_link_target
from skillvault.config import VaultConfig
from skillvault.constants.checks import BROKEN_LINK_SCORE
from skillvault.io import path_exists
from skillvault.model import DocumentLink, FindingCandidate, VaultDocument


class BrokenLinkCheck(Check):
    """Flag relative links whose target path does not exist."""

    rule_id = "BROKEN_LINK"

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=BROKEN_LINK_SCORE,
                confidence="high",
                title="Broken relative link",
                description=f"{'Image' if link.is_image else 'Link'} target '{link.target}' does not exist.",
                evidence=field_evidence(document, link),
                recommendation="Fix the path or add the missing file.",
            )
            for link, target in checked_links(document, config)
            if not path_exists(target)
        ]


def checked_links(document: VaultDocument, config: VaultConfig) -> Iterator[tuple[DocumentLink, Path]]:
    """Yield the document's links that resolve to a local path, with that path.

    Images are included only when ``links.check_images`` is set.
    """
    if document.markdown is None:
        return
    for link in document.markdown.links:
        if link.is_image and not config.links.check_images:
            continue
        target = resolve_link_target(link.target, source=document.path, root=document.root, ignore=config.links.ignore)
        if target is not None:
            yield link, target


def link_target_states(document: VaultDocument, config: VaultConfig) -> dict[str, bool]:
    """Existence of every checked link target, keyed by absolute path.

    The cache stores this map and re-verifies it before reusing findings.
    """
    return {str(target): path_exists(target) for _, target in checked_links(document, config)}
