"""Cross-reference checks run after each discovery phase."""

import logging
from collections.abc import Mapping

from discord_schema.errors import ReferenceValidationError
from discord_schema.parser.base import PRIMITIVE_TYPES, ApiObject, ReferenceRegistry

logger = logging.getLogger(__name__)


def missing_objects(registry: ReferenceRegistry, objects: Mapping[str, ApiObject]) -> list[str]:
    """Referenced object names with no structure definition, sorted."""
    return sorted(name for name in registry.objects if name not in objects)


def invalid_types(registry: ReferenceRegistry) -> list[str]:
    """Recorded type tags outside the closed primitive set, sorted."""
    return sorted(t for t in registry.types if t not in PRIMITIVE_TYPES)


def validate_object_phase(registry: ReferenceRegistry, objects: Mapping[str, ApiObject]) -> None:
    """Check references collected while reading structure sections.

    Missing objects and unclassified types are fatal. On success the
    ``types`` set is reset for the endpoint phase.
    """
    missing = missing_objects(registry, objects)
    if missing:
        raise ReferenceValidationError("referenced but missing definitions", missing)

    types = invalid_types(registry)
    if types:
        raise ReferenceValidationError(
            "referenced but missing types while getting object definitions", types
        )

    unreferenced = sorted(name for name in objects if name not in registry.objects)
    logger.debug("Unreferenced objects: %s", ", ".join(unreferenced))
    registry.reset_types()


def validate_endpoint_phase(registry: ReferenceRegistry, objects: Mapping[str, ApiObject]) -> None:
    """Check references collected while reading endpoint sections.

    Objects referenced only by endpoint bodies may live outside the pages
    read in this run, so those are logged. Unresolved doc anchors and
    unclassified types are fatal.
    """
    missing = missing_objects(registry, objects)
    if missing:
        logger.warning(
            "Found %d referenced but missing definitions:\n%s", len(missing), ", ".join(missing)
        )

    missing_docs = sorted(registry.missing_docs)
    if missing_docs:
        raise ReferenceValidationError("referenced but missing docs references", missing_docs)

    types = invalid_types(registry)
    if types:
        raise ReferenceValidationError(
            "referenced but missing types while getting endpoint definitions", types
        )
