"""Markdown parsing for skills, commands and notes.

A document may open with a ``---`` frontmatter block; everything after it
is the body. Body lines are tagged as prose, heading or fenced code, and
links are only collected outside fences.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from skillvault.constants.parsing import (
    FENCED_CODE_BLOCK_PATTERN,
    FRONTMATTER_ALT_DELIMITER,
    FRONTMATTER_DELIMITER,
    FRONTMATTER_KEY_PATTERN,
    HEADING_PATTERN,
    INLINE_CODE_PATTERN,
    INLINE_LINK_PATTERN,
    REFERENCE_DEFINITION_PATTERN,
    SNIPPET_MAX_LENGTH,
)
from skillvault.exceptions import DocumentParseError
from skillvault.model import DocumentField, DocumentKey, DocumentLink, ParsedMarkdownDocument
from skillvault.model.entities import FieldSource


def parse_vault_markdown_file(path: Path) -> ParsedMarkdownDocument:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentParseError(f"File is not valid UTF-8: {path}") from exc
    return parse_vault_markdown_text(text, path)


def parse_vault_markdown_text(raw_text: str, path: Path) -> ParsedMarkdownDocument:
    """Parse *raw_text* as the content of *path*.

    Raises :class:`DocumentParseError` for an unterminated block, invalid
    YAML, or frontmatter that is not a mapping.
    """
    lines = raw_text.removeprefix("\ufeff").splitlines()
    closing = _closing_delimiter(lines, path)
    frontmatter: dict[str, Any] | None = None
    keys: tuple[DocumentKey, ...] = ()
    body_offset = 0

    if closing is not None:
        header = lines[1:closing]
        frontmatter = _load_frontmatter(header, path)
        keys = tuple(_frontmatter_keys(header))
        body_offset = closing + 1

    body = lines[body_offset:]
    fields: list[DocumentField] = []
    links: list[DocumentLink] = []
    for line_no, text, source in _classify(body, first_line=body_offset + 1):
        fields.append(
            DocumentField(
                line=line_no,
                value=text,
                snippet=text[:SNIPPET_MAX_LENGTH],
                in_code_block=source == "code_block",
                field_source=source,
            )
        )
        if source != "code_block":
            links.extend(_links_on_line(text, line_no))

    return ParsedMarkdownDocument(
        file_path=path,
        raw_text=raw_text,
        frontmatter=frontmatter,
        has_frontmatter=closing is not None,
        body="\n".join(body).strip(),
        fields=tuple(fields),
        keys=keys,
        links=tuple(links),
    )


def _closing_delimiter(lines: list[str], path: Path) -> int | None:
    """Index of the line closing a leading frontmatter block, or ``None`` without one."""
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() in (FRONTMATTER_DELIMITER, FRONTMATTER_ALT_DELIMITER):
            return index
    raise DocumentParseError(f"Unterminated frontmatter block in {path}")


def _load_frontmatter(header: list[str], path: Path) -> dict[str, Any] | None:
    source = "\n".join(header)
    if not source.strip():
        return None
    try:
        loaded = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        raise DocumentParseError(f"Failed to parse frontmatter in {path}: {exc}") from exc
    if loaded is None or isinstance(loaded, dict):
        return loaded
    raise DocumentParseError(f"Frontmatter in {path} must be a YAML mapping")


def _frontmatter_keys(header: list[str]) -> Iterator[DocumentKey]:
    # Line 1 is the opening delimiter, so header line i sits on line i + 2.
    for offset, line in enumerate(header):
        if not line or line[0].isspace() or line.startswith("#"):
            continue
        match = FRONTMATTER_KEY_PATTERN.match(line)
        if match:
            yield DocumentKey(key=match.group(1), line=offset + 2, snippet=line.strip()[:SNIPPET_MAX_LENGTH])


def _classify(body: list[str], *, first_line: int) -> Iterator[tuple[int, str, FieldSource]]:
    """Yield non-blank body lines with their line number and source.

    Fence lines count as code. A fence closes only on the same marker
    character that opened it.
    """
    open_fence: str | None = None
    for line_no, line in enumerate(body, start=first_line):
        text = line.strip()
        fence = FENCED_CODE_BLOCK_PATTERN.match(text)
        if fence is not None:
            marker = fence.group(1)[0]
            if open_fence is None:
                open_fence = marker
            elif marker == open_fence:
                open_fence = None
            yield line_no, text, "code_block"
            continue
        if not text:
            continue
        if open_fence is not None:
            yield line_no, text, "code_block"
        elif HEADING_PATTERN.match(text):
            yield line_no, text, "heading"
        else:
            yield line_no, text, "prose"


def _links_on_line(text: str, line_no: int) -> list[DocumentLink]:
    snippet = text[:SNIPPET_MAX_LENGTH]
    definition = REFERENCE_DEFINITION_PATTERN.match(text)
    if definition:
        return [
            DocumentLink(
                target=_unwrap(definition.group(2)),
                text=definition.group(1),
                line=line_no,
                snippet=snippet,
                is_reference=True,
            )
        ]
    # Links inside inline code spans are examples, not references.
    return [
        DocumentLink(
            target=_unwrap(match.group(3)),
            text=match.group(2),
            line=line_no,
            snippet=snippet,
            is_image=match.group(1) == "!",
        )
        for match in INLINE_LINK_PATTERN.finditer(INLINE_CODE_PATTERN.sub("", text))
    ]


def _unwrap(target: str) -> str:
    target = target.strip()
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1].strip()
    return target
