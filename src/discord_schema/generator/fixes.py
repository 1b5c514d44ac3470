"""Fixups applied to named endpoints before the schema is written."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from discord_schema.config import SchemaConfig
from discord_schema.parser.base import Endpoint, Returns

logger = logging.getLogger(__name__)

MULTIPART_FIELD = "payload_json"
FILES_FIELD = "files"
ATTACHMENTS_FIELD = "attachments"
ARRAY_SUFFIXES = ("/list", "/search")


@dataclass
class Fix:
    name: str
    apply: Callable[[list[Endpoint], SchemaConfig], list[Endpoint]]


def restructure_multipart(endpoint: Endpoint) -> Endpoint:
    """Fold ``files`` into ``attachments`` for endpoints that take ``payload_json``."""
    params = {p.name: p for p in endpoint.json_params}
    endpoint.supports_multipart = MULTIPART_FIELD in params
    if not endpoint.supports_multipart:
        return endpoint

    files = params.get(FILES_FIELD)
    attachments = params.get(ATTACHMENTS_FIELD)
    if files is not None:
        if attachments is not None:
            attachments.schema_ = files.schema_
        else:
            files.name = ATTACHMENTS_FIELD
            files = None

    endpoint.json_params = [
        p for p in endpoint.json_params if p.name != MULTIPART_FIELD and p is not files
    ]
    if endpoint.method == "PATCH":
        for param in endpoint.json_params:
            param.optional = True
            param.is_nullable = True
    return endpoint


def _restructure_multipart(endpoints: list[Endpoint], config: SchemaConfig) -> list[Endpoint]:
    return [restructure_multipart(endpoint) for endpoint in endpoints]


def _set_return_types(endpoints: list[Endpoint], config: SchemaConfig) -> list[Endpoint]:
    for endpoint in endpoints:
        if endpoint.name.endswith(ARRAY_SUFFIXES):
            endpoint.returns = Returns(type="array")
        else:
            endpoint.returns = Returns(type="object")
    return endpoints


def _remove_disabled(endpoints: list[Endpoint], config: SchemaConfig) -> list[Endpoint]:
    disabled = set(config.disabled_endpoints)
    return [endpoint for endpoint in endpoints if endpoint.name not in disabled]


FIXES = [
    Fix("Restructure multipart uploads", _restructure_multipart),
    Fix("Set return types", _set_return_types),
    Fix("Remove disabled endpoints", _remove_disabled),
]


def apply_fixes(endpoints: list[Endpoint], config: SchemaConfig, fixes: list[Fix] | None = None) -> list[Endpoint]:
    for fix in FIXES if fixes is None else fixes:
        logger.info('Applying fix "%s"...', fix.name)
        fixed = fix.apply(endpoints, config)
        if not isinstance(fixed, list):
            raise TypeError(f'Fix "{fix.name}" must return a list of endpoints')
        endpoints = fixed
    return endpoints
