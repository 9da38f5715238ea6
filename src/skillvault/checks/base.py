"""Check interface for vault lint rules."""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from typing import ClassVar

from skillvault.config import VaultConfig
from skillvault.model import FindingCandidate, VaultDocument
from skillvault.types import DocumentKind

_RULE_ID_PATTERN: re.Pattern[str] = re.compile(r"^[A-Z][A-Z0-9_]+$")


class Check(ABC):
    """Abstract base class for check implementations."""

    rule_id: ClassVar[str]
    kinds: ClassVar[frozenset[DocumentKind]] = frozenset({"skill", "command", "mcp_server"})

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Validate check subclasses define a valid UPPER_SNAKE_CASE `rule_id`."""
        super().__init_subclass__(**kwargs)
        if inspect.isabstract(cls):
            return

        rule_id = getattr(cls, "rule_id", None)
        if not isinstance(rule_id, str) or not rule_id.strip():
            raise TypeError(f"{cls.__name__} must define a non-empty class attribute `rule_id`")
        if not _RULE_ID_PATTERN.match(rule_id):
            raise TypeError(f"{cls.__name__}.rule_id must be UPPER_SNAKE_CASE (got {rule_id!r})")

    def applies_to(self, document: VaultDocument) -> bool:
        """Whether this check runs for the document's kind."""
        return document.kind in self.kinds

    @abstractmethod
    def run(
        self,
        *,
        document: VaultDocument,
        config: VaultConfig,
    ) -> list[FindingCandidate]:
        """Run check on a parsed vault document."""
