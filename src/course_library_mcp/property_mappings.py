"""Start-up registration of public -> storage property mappings.

Build the registry once while the server starts and hand it to whatever
needs to sort (repositories, resources, tools). It is frozen on return.
"""

import logging

from .database.schema import Author
from .models.author import AuthorDto
from .shaping import PropertyMappingRegistry, PropertyMappingValue

logger = logging.getLogger(__name__)

AUTHOR_PROPERTY_MAPPING: dict[str, PropertyMappingValue] = {
    "id": PropertyMappingValue(destination_properties=("id",)),
    "mainCategory": PropertyMappingValue(destination_properties=("main_category",)),
    # Older birth date = greater age
    "age": PropertyMappingValue(destination_properties=("date_of_birth",), revert=True),
    "name": PropertyMappingValue(destination_properties=("first_name", "last_name")),
}


def build_property_mapping_registry() -> PropertyMappingRegistry:
    """Register every known mapping and freeze the registry."""
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, AUTHOR_PROPERTY_MAPPING)
    logger.info("Property mapping registry built with %d mapping(s)", len(registry))
    return registry.freeze()
