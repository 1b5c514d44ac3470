"""Object extraction: structure sections -> named ApiObjects.

A structure section is a heading ending in Structure, Object, Metadata or
Info, optionally followed by a ``###### Messages`` sub-heading and prose,
then a field table. Only the first table of a section is read.
"""

import logging
import re
from collections.abc import Mapping

from discord_schema.parser.base import ApiObject, ReferenceRegistry
from discord_schema.parser.structure import read_structure
from discord_schema.parser.text import singularize, take_table
from discord_schema.parser.types import map_object_name

logger = logging.getLogger(__name__)

OBJECT_HEADING_RE = re.compile(
    r"^#{3,6} (.*?)(Structure|Object|Metadata|Info)\s*$", re.IGNORECASE
)
MESSAGES_HEADING = "###### Messages"
KEPT_SUFFIXES = ("metadata", "info")
EXAMPLE_PREFIX = "example_"


def object_name(heading: str, suffix: str) -> str | None:
    """Derive the registry name for a structure heading.

    Returns None for sections that document example payloads.
    """
    name = heading
    if suffix.lower() in KEPT_SUFFIXES:
        name += suffix
    name = name.strip().lower().replace(" ", "_")
    if not name or name.startswith(EXAMPLE_PREFIX):
        return None
    name = singularize(name)
    if name.endswith("_object"):
        name = name[: -len("_object")]
    return map_object_name(name)


def extract_objects(
    doc: str,
    objects: dict[str, ApiObject],
    registry: ReferenceRegistry,
    references: Mapping[str, str] | None = None,
) -> dict[str, ApiObject]:
    """Register every structure section in ``doc`` into ``objects``.

    Registration is last-write-wins: a later section with the same derived
    name replaces the earlier one.
    """
    lines = doc.splitlines()
    for i, line in enumerate(lines):
        match = OBJECT_HEADING_RE.match(line.strip())
        if not match:
            continue
        name = object_name(match.group(1), match.group(2))
        if name is None:
            continue
        table, _ = take_table(lines, i + 1, skip=(MESSAGES_HEADING,))
        if table is None:
            continue
        if name in objects:
            logger.debug("Replacing object :: %s", name)
        logger.debug("Loading object :: %s", name)
        objects[name] = ApiObject(name=name, fields=read_structure(table, registry, references))
    return objects
