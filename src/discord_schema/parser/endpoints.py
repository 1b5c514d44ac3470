"""Endpoint extraction: endpoint sections -> raw Endpoints.

An endpoint section starts with a ``# Title % METHOD /path`` heading. Its
body holds optional blockquote callouts, description paragraphs, an
optional Limitations list and optional Query String / JSON parameter
tables, each under its own heading.
"""

import logging
import re
from collections.abc import Mapping

from discord_schema.errors import GrammarError
from discord_schema.parser.base import ApiObject, Endpoint, Parameter, ReferenceRegistry
from discord_schema.parser.structure import read_structure
from discord_schema.parser.text import is_heading, is_table_row, read_description, take_table
from discord_schema.parser.types import map_object_name

logger = logging.getLogger(__name__)

# Loose form, used to count the sections the strict form has to parse.
ENDPOINT_MARKER_RE = re.compile(r"# (.*?) % (.*)")
ENDPOINT_HEADING_RE = re.compile(r"^#+ (.+?) % ([A-Za-z]+) (/\S*)\s*$")
PATH_VAR_RE = re.compile(r"\{([^}#]*)(?:#[^}]*)?\}")
THIS_RE = re.compile(r"(^| )(this)( |$)", re.IGNORECASE)
BULLET_RE = re.compile(r"^[-*] ")

LIMITATIONS = "limitations"
QUERY_PARAMS = "query string params"
JSON_PARAMS = ("json params", "json/form params")


def count_endpoint_sections(doc: str) -> int:
    return sum(1 for line in doc.splitlines() if ENDPOINT_MARKER_RE.search(line))


def _heading_text(line: str) -> str:
    return line.strip().lstrip("#").strip().lower()


def _split_sections(lines: list[str]) -> list[tuple[re.Match, list[str]]]:
    """Pair each parseable endpoint heading with the lines of its body."""
    starts = [i for i, line in enumerate(lines) if ENDPOINT_MARKER_RE.search(line)]
    sections = []
    for n, start in enumerate(starts):
        match = ENDPOINT_HEADING_RE.match(lines[start].strip())
        if not match:
            logger.error("Could not parse endpoint heading: %s", lines[start].strip())
            continue
        end = starts[n + 1] if n + 1 < len(starts) else len(lines)
        sections.append((match, lines[start + 1:end]))
    return sections


def _read_description_block(body: list[str]) -> tuple[str, int]:
    """Collect description paragraphs up to the first sub-heading."""
    paragraphs: list[list[str]] = []
    current: list[str] = []
    in_fence = False
    i = 0
    while i < len(body):
        stripped = body[i].strip()
        if stripped.startswith("```"):
            in_fence = not in_fence
        elif in_fence:
            pass
        elif is_heading(stripped):
            break
        elif not stripped:
            if current:
                paragraphs.append(current)
                current = []
        elif not (stripped.startswith(">") or BULLET_RE.match(stripped) or is_table_row(stripped)):
            current.append(stripped)
        i += 1
    if current:
        paragraphs.append(current)
    return "\n\n".join("\n".join(p) for p in paragraphs), i


def _read_param_tables(body: list[str], start: int) -> tuple[str, str]:
    """Return the (query, json) tables found under the recognized sub-headings."""
    query_table = ""
    json_table = ""
    i = start
    while i < len(body):
        line = body[i]
        if not is_heading(line):
            i += 1
            continue
        heading = _heading_text(line)
        if heading == LIMITATIONS:
            i += 1
        elif heading == QUERY_PARAMS:
            table, i = take_table(body, i + 1)
            query_table = table or ""
        elif heading in JSON_PARAMS:
            table, i = take_table(body, i + 1)
            json_table = table or ""
        else:
            break
    return query_table, json_table


def resolve_path(url: str, objects: Mapping[str, ApiObject]) -> tuple[str, list[Parameter]]:
    """Rewrite ``{object.property#anchor}`` variables to ``{object_property}``.

    Each variable becomes a path Parameter typed after the referenced object
    field (``id`` when no property is given). Lookup failures are logged and
    leave a bare string parameter.
    """
    path_params = []

    def _replace(match: re.Match) -> str:
        token = match.group(1)
        obj_name, _, prop = token.partition(".")
        name = token.replace(".", "_")
        param = Parameter(name=name, type="string", optional=False, is_nullable=False)

        obj_name = map_object_name(obj_name)
        prop = prop or "id"
        obj = objects.get(obj_name)
        if obj is None:
            logger.warning("Could not match object: %s", obj_name)
        else:
            found = next((f for f in obj.fields if f.name == prop), None)
            if found is None:
                logger.warning("Could not match object property: %s.%s", obj_name, prop)
            else:
                param.description = THIS_RE.sub(r"\1the\3", found.description)
                param.type = found.type

        path_params.append(param)
        return "{" + name + "}"

    return PATH_VAR_RE.sub(_replace, url), path_params


def extract_endpoints(
    namespace: str,
    doc: str,
    objects: Mapping[str, ApiObject],
    registry: ReferenceRegistry,
    references: Mapping[str, str] | None = None,
) -> list[Endpoint]:
    """Parse every endpoint section of a documentation page.

    Raises GrammarError if fewer sections parse than endpoint headings exist.
    """
    expected = count_endpoint_sections(doc)
    logger.info("Reading endpoints for %s (expecting %d)", namespace, expected)

    endpoints = []
    for match, body in _split_sections(doc.splitlines()):
        title, method, url = match.group(1).strip(), match.group(2).upper(), match.group(3)
        description, i = _read_description_block(body)
        query_table, json_table = _read_param_tables(body, i)
        url, path_params = resolve_path(url, objects)

        endpoints.append(
            Endpoint(
                namespace=namespace,
                title=title,
                method=method,
                url=url,
                description=read_description(description, registry, references).strip(),
                path_params=path_params,
                query_params=read_structure(query_table, registry, references),
                json_params=read_structure(json_table, registry, references),
            )
        )

    logger.info("Found %d endpoints in %s", len(endpoints), namespace)
    if len(endpoints) != expected:
        raise GrammarError(
            f"Mismatch in {namespace}: expected {expected} endpoints, parsed {len(endpoints)}"
        )
    return endpoints
