"""Shared text helpers for the documentation dialect."""

import re
from collections.abc import Mapping

from discord_schema.config import DEFAULT_DOCS_REFERENCES
from discord_schema.parser.base import ReferenceRegistry

DOCS_ANCHOR_RE = re.compile(r"#(.+?)/")
FIRST_SENTENCE_RE = re.compile(r"^(.+?)\. ")
CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")


def is_plural(word: str) -> bool:
    return word.endswith("s") and not word.endswith("us")


def singularize(word: str) -> str:
    return word[:-1] if is_plural(word) else word


def read_description(
    description: str | None,
    registry: ReferenceRegistry,
    references: Mapping[str, str] | None = None,
) -> str:
    """Normalize a description cell or paragraph.

    Doc anchors such as ``#DOCS_RESOURCES_CHANNEL/`` become absolute URLs;
    unknown anchors are left in place and recorded in ``registry.missing_docs``.
    The first sentence is split onto its own line and capitalized.
    """
    if not description:
        return ""
    if references is None:
        references = DEFAULT_DOCS_REFERENCES

    def _resolve(match: re.Match) -> str:
        key = match.group(0)
        if key in references:
            return references[key]
        registry.missing_docs.add(key)
        return key

    text = DOCS_ANCHOR_RE.sub(_resolve, description)
    text = FIRST_SENTENCE_RE.sub(r"\1\n", text, count=1).strip()
    if not text:
        return ""
    return text[0].upper() + text[1:]


def is_table_row(line: str) -> bool:
    line = line.strip()
    return len(line) > 1 and line.startswith("|") and line.endswith("|")


def split_row(row: str) -> list[str]:
    """Split a Markdown table row into trimmed cells, keeping empty ones."""
    row = row.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    return [cell.strip() for cell in CELL_SPLIT_RE.split(row)]


def is_heading(line: str) -> bool:
    return line.lstrip().startswith("#")


def take_table(lines: list[str], start: int, skip: tuple[str, ...] = ()) -> tuple[str | None, int]:
    """Return the first table block at or after ``start`` and the index past it.

    Blank lines and prose paragraphs are skipped, as are heading lines listed
    in ``skip``. Any other heading or a code fence ends the search with no table.
    """
    i = start
    while i < len(lines):
        stripped = lines[i].strip()
        if is_table_row(stripped):
            end = i
            while end < len(lines) and is_table_row(lines[end]):
                end += 1
            return "\n".join(line.strip() for line in lines[i:end]), end
        if stripped in skip:
            i += 1
            continue
        if stripped.startswith(("#", "`", "|")):
            return None, i
        i += 1
    return None, i
