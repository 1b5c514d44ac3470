"""Markdown field tables -> Parameter lists."""

import re
from collections.abc import Mapping

from discord_schema.errors import GrammarError
from discord_schema.parser.base import Parameter, ReferenceRegistry
from discord_schema.parser.text import read_description, split_row
from discord_schema.parser.types import read_type

NAME_TAIL_RE = re.compile(r"\s*[^a-z?_\]]*$", re.IGNORECASE)
ARRAY_INDEX_RE = re.compile(r"\[n\]$")

# Literal "Required" column values -> resulting `optional` flag
REQUIRED_VALUES = {
    "true": False,
    "false": True,
    "`multipart/form-data` only": True,
}


def _is_optional_by_required(value: str) -> bool:
    if value in REQUIRED_VALUES:
        return REQUIRED_VALUES[value]
    if value.startswith("one of "):
        return True
    raise GrammarError(f'Found required with no edge case handler: "{value}"')


def read_structure(
    table: str | None,
    registry: ReferenceRegistry,
    references: Mapping[str, str] | None = None,
) -> list[Parameter]:
    """Parse a table (header row, separator row, data rows) into Parameters.

    Every resolved type, and the element type of arrays, is recorded in
    ``registry.types`` so unclassified types surface during validation.
    """
    if not table or not table.strip():
        return []

    rows = table.strip("\n").split("\n")
    headers = [h.lower() for h in split_row(rows[0])]

    params = []
    for row in rows[2:]:
        if not row.strip():
            continue
        cells = dict(zip(headers, split_row(row)))
        param = _read_row(cells, registry, references)
        registry.types.add(param.type)
        if param.schema_:
            registry.types.add(param.schema_[0].type)
        params.append(param)
    return params


def _read_row(
    cells: dict[str, str],
    registry: ReferenceRegistry,
    references: Mapping[str, str] | None,
) -> Parameter:
    name = NAME_TAIL_RE.sub("", cells.get("field") or cells.get("name") or "")
    optional = name.endswith("?")
    if optional:
        name = name[:-1]

    required = cells.get("required")
    if required:
        optional = _is_optional_by_required(required)
    if cells.get("default"):
        optional = True

    type_text = cells.get("type") or ""
    is_nullable = False
    if type_text.startswith("?"):
        type_text, is_nullable = type_text[1:], True
    elif type_text.endswith("?"):
        type_text, is_nullable = type_text[:-1], True

    param = Parameter(
        name=ARRAY_INDEX_RE.sub("", name),
        optional=optional,
        is_nullable=is_nullable,
        description=read_description(cells.get("description"), registry, references),
    )
    return read_type(param, type_text, registry)
