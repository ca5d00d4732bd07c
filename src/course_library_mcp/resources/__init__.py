"""Course Library MCP Resources Package

Read-only resources of the Course Library server. Each resource has a
library:// URI, a MIME type and a handler; writes go through tools.

Author resources need the property mapping registry (for sorting), so they
are built by factories once the registry exists. Course resources do not.
"""

from typing import Any

from ..shaping import PropertyMappingRegistry
from .author_collections import build_author_collection_resources
from .authors import build_author_resources
from .courses import course_resources


def build_resources(property_mappings: PropertyMappingRegistry) -> list[dict[str, Any]]:
    """Every resource descriptor, ready for server registration."""
    return (
        build_author_resources(property_mappings)
        + course_resources
        + build_author_collection_resources(property_mappings)
    )


__all__ = [
    "build_author_collection_resources",
    "build_author_resources",
    "build_resources",
    "course_resources",
]
