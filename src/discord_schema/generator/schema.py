"""Two-phase schema build: objects first, then endpoints, then naming and fixes."""

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path

import yaml

from discord_schema.config import SchemaConfig
from discord_schema.fetch import fetch_document
from discord_schema.generator.fixes import apply_fixes
from discord_schema.generator.naming import name_endpoints
from discord_schema.generator.validator import validate_endpoint_phase, validate_object_phase
from discord_schema.parser.base import ApiObject, Endpoint, ReferenceRegistry
from discord_schema.parser.endpoints import extract_endpoints
from discord_schema.parser.objects import extract_objects

logger = logging.getLogger(__name__)

SCHEMA_FORMATS = ("json", "yaml")


def load_documents(
    pages: Mapping[str, str],
    fetch: Callable[[str], str] = fetch_document,
) -> dict[str, str]:
    """Fetch every page in order, one at a time."""
    documents = {}
    for i, (namespace, url) in enumerate(pages.items(), start=1):
        logger.info('Reading docs for namespace "%s" (%d of %d)...', namespace, i, len(pages))
        documents[namespace] = fetch(url)
    return documents


def read_documents(paths: list[Path]) -> dict[str, str]:
    """Load local Markdown files, using each file stem as its namespace."""
    return {path.stem: path.read_text(encoding="utf-8") for path in paths}


def discover_objects(
    documents: Mapping[str, str],
    registry: ReferenceRegistry,
    references: Mapping[str, str] | None = None,
) -> dict[str, ApiObject]:
    objects: dict[str, ApiObject] = {}
    for namespace, doc in documents.items():
        logger.info('Reading objects for namespace "%s"...', namespace)
        extract_objects(doc, objects, registry, references)
    return objects


def discover_endpoints(
    documents: Mapping[str, str],
    objects: Mapping[str, ApiObject],
    registry: ReferenceRegistry,
    references: Mapping[str, str] | None = None,
) -> list[Endpoint]:
    endpoints: list[Endpoint] = []
    for namespace, doc in documents.items():
        endpoints.extend(extract_endpoints(namespace, doc, objects, registry, references))
    return endpoints


def build_schema(documents: Mapping[str, str], config: SchemaConfig | None = None) -> list[Endpoint]:
    """Build the final endpoint list from namespace -> Markdown documents.

    Raises a SchemaBuildError subclass on any grammar, reference or naming
    failure; nothing is returned in that case.
    """
    config = config or SchemaConfig()
    registry = ReferenceRegistry()

    objects = discover_objects(documents, registry, config.docs_references)
    logger.info("Loaded %d objects", len(objects))
    validate_object_phase(registry, objects)

    endpoints = discover_endpoints(documents, objects, registry, config.docs_references)
    logger.info("Loaded %d endpoints", len(endpoints))
    validate_endpoint_phase(registry, objects)

    endpoints = name_endpoints(endpoints)
    return apply_fixes(endpoints, config)


def schema_to_data(endpoints: list[Endpoint]) -> list[dict]:
    return [e.model_dump(mode="json", by_alias=True, exclude_none=True) for e in endpoints]


def dump_schema(endpoints: list[Endpoint], fmt: str = "json") -> str:
    """Serialize the schema as JSON (2-space indent) or YAML."""
    data = schema_to_data(endpoints)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    raise ValueError(f"Unknown schema format: {fmt}")
