"""Frontmatter and document-shape checks for skills and commands."""

from __future__ import annotations

import logging

from skillvault.checks.base import Check
from skillvault.checks.common import document_evidence, is_empty_value
from skillvault.config import VaultConfig
from skillvault.constants.checks import (
    DOCUMENT_EMPTY_SCORE,
    FRONTMATTER_KEY_EMPTY_SCORE,
    FRONTMATTER_KEY_MISSING_SCORE,
    FRONTMATTER_MISSING_SCORE,
    FRONTMATTER_VERSION_FORMAT_SCORE,
    SKILL_NAME_MISMATCH_SCORE,
    VERSION_PATTERN,
)
from skillvault.constants.discovery import SKILL_MARKDOWN_FILENAME
from skillvault.model import FindingCandidate, VaultDocument
from skillvault.utils import sanitize_output_name

logger = logging.getLogger(__name__)


class FrontmatterMissingCheck(Check):
    """Flag documents with required keys but no frontmatter block at all."""

    rule_id = "FRONTMATTER_MISSING"
    kinds = frozenset({"skill", "command"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        parsed = document.markdown
        if parsed is None or parsed.has_frontmatter:
            return []
        required = config.required_keys_for(document.kind)
        if not required:
            return []

        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=FRONTMATTER_MISSING_SCORE,
                confidence="high",
                title="Frontmatter block missing",
                description=(
                    f"The {document.kind} has no YAML frontmatter; expected keys: {', '.join(required)}."
                ),
                evidence=document_evidence(document, line=1),
                recommendation="Add a `---` delimited frontmatter block declaring the required keys.",
            )
        ]


class FrontmatterKeyMissingCheck(Check):
    """Flag required frontmatter keys that are absent."""

    rule_id = "FRONTMATTER_KEY_MISSING"

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        parsed = document.markdown
        if parsed is None or not parsed.has_frontmatter:
            return []
        frontmatter = parsed.frontmatter or {}

        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=FRONTMATTER_KEY_MISSING_SCORE,
                confidence="high",
                title="Required frontmatter key missing",
                description=f"Frontmatter does not declare required key '{key}'.",
                evidence=document_evidence(document, line=1),
                recommendation=f"Add `{key}:` with a non-empty value to the frontmatter.",
            )
            for key in config.required_keys_for(document.kind)
            if key not in frontmatter
        ]


class FrontmatterKeyEmptyCheck(Check):
    """Flag required frontmatter keys declared without a value."""

    rule_id = "FRONTMATTER_KEY_EMPTY"

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        parsed = document.markdown
        if parsed is None or not parsed.frontmatter:
            return []

        candidates: list[FindingCandidate] = []
        for key in config.required_keys_for(document.kind):
            if key not in parsed.frontmatter or not is_empty_value(parsed.frontmatter[key]):
                continue
            candidates.append(
                FindingCandidate(
                    rule_id=self.rule_id,
                    score=FRONTMATTER_KEY_EMPTY_SCORE,
                    confidence="high",
                    title="Required frontmatter key empty",
                    description=f"Frontmatter key '{key}' is declared but empty.",
                    evidence=document_evidence(document, line=parsed.key_line(key)),
                    recommendation=f"Give `{key}` a meaningful value.",
                )
            )
        return candidates


class FrontmatterVersionFormatCheck(Check):
    """Flag ``version`` values that are not dotted numeric versions."""

    rule_id = "FRONTMATTER_VERSION_FORMAT"
    kinds = frozenset({"skill", "command"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        parsed = document.markdown
        if parsed is None or not parsed.frontmatter or "version" not in parsed.frontmatter:
            return []
        value = parsed.frontmatter["version"]
        if is_empty_value(value) or isinstance(value, bool):
            return []
        rendered = str(value).strip()
        if isinstance(value, (str, int, float)) and VERSION_PATTERN.match(rendered):
            return []

        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=FRONTMATTER_VERSION_FORMAT_SCORE,
                confidence="medium",
                title="Unconventional version value",
                description=f"Frontmatter version {rendered!r} is not of the form MAJOR[.MINOR[.PATCH]].",
                evidence=document_evidence(document, line=parsed.key_line("version")),
                recommendation="Use a semantic version such as `1.0.0`.",
                classification="informational",
            )
        ]


class SkillNameMismatchCheck(Check):
    """Flag skills whose declared name disagrees with their folder."""

    rule_id = "SKILL_NAME_MISMATCH"
    kinds = frozenset({"skill"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        parsed = document.markdown
        if parsed is None or not parsed.frontmatter or document.path.name != SKILL_MARKDOWN_FILENAME:
            return []
        declared = parsed.frontmatter.get("name")
        if not isinstance(declared, str) or not declared.strip():
            return []
        folder = document.path.parent.name
        if sanitize_output_name(declared) == sanitize_output_name(folder):
            return []

        logger.debug("Skill name %r differs from folder %r", declared, folder)
        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=SKILL_NAME_MISMATCH_SCORE,
                confidence="medium",
                title="Skill name differs from folder",
                description=f"Declared name '{declared.strip()}' does not match folder '{folder}'.",
                evidence=document_evidence(document, line=parsed.key_line("name")),
                recommendation="Rename the folder or the declared name so the skill is found under one name.",
                classification="informational",
            )
        ]


class DocumentEmptyCheck(Check):
    """Flag skills and commands with no body content."""

    rule_id = "DOCUMENT_EMPTY"
    kinds = frozenset({"skill", "command"})

    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        parsed = document.markdown
        if parsed is None or parsed.body:
            return []

        return [
            FindingCandidate(
                rule_id=self.rule_id,
                score=DOCUMENT_EMPTY_SCORE,
                confidence="high",
                title="Document body empty",
                description=f"The {document.kind} has no instructions after its frontmatter.",
                evidence=document_evidence(document, line=1),
                recommendation="Write the instructions the assistant should follow, or remove the file.",
            )
        ]


FRONTMATTER_CHECK_CLASSES: tuple[type[Check], ...] = (
    FrontmatterMissingCheck,
    FrontmatterKeyMissingCheck,
    FrontmatterKeyEmptyCheck,
    FrontmatterVersionFormatCheck,
    SkillNameMismatchCheck,
    DocumentEmptyCheck,
)
