"""Author Collection Resources - Several Authors At Once

Resources:
- library://authorcollections/{author_ids} - Authors by id, e.g. "(id1,id2)"

A collection is all-or-nothing: if any requested author is missing the whole
read fails.
"""

import logging
from typing import Any
from uuid import UUID

from fastmcp.exceptions import ResourceError
from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from ..database.author_repository import AuthorRepository
from ..database.repository import NotFoundError
from ..database.session import session_scope
from ..models.author import AuthorForCreationDto
from ..shaping import PropertyMappingRegistry
from .uri_utils import URIParseError, build_library_uri, format_author_ids, parse_author_ids

logger = logging.getLogger(__name__)

_AUTHOR_COLLECTION_ADAPTER = TypeAdapter(list[AuthorForCreationDto])


def get_author_collection(
    session: Session, property_mappings: PropertyMappingRegistry, author_ids: list[UUID]
) -> list[dict[str, Any]]:
    """
    The authors with the given ids, in request order. Repeated ids are
    returned once.

    Raises:
        NotFoundError: If any of the ids has no author
    """
    requested = list(dict.fromkeys(author_ids))
    authors = AuthorRepository(session, property_mappings).get_authors_by_ids(requested)
    if len(authors) != len(requested):
        found = {author.id for author in authors}
        missing = [str(author_id) for author_id in requested if author_id not in found]
        raise NotFoundError(f"Authors not found: {', '.join(missing)}")
    return [author.to_wire() for author in authors]


def create_author_collection(
    session: Session, property_mappings: PropertyMappingRegistry, payload: list[Any]
) -> dict[str, Any]:
    """
    Create several authors in one transaction.

    Returns:
        ``{"value": [...], "location": "library://authorcollections/(...)"}``

    Raises:
        pydantic.ValidationError: If any author payload is invalid
        RepositoryException: If the authors cannot be stored
    """
    authors_data = _AUTHOR_COLLECTION_ADAPTER.validate_python(payload)
    authors = AuthorRepository(session, property_mappings).create_authors(authors_data)
    author_ids = [author.id for author in authors]
    logger.info("Created author collection of %d author(s)", len(authors))
    return {
        "value": [author.to_wire() for author in authors],
        "location": build_library_uri("authorcollections", format_author_ids(author_ids)),
    }


def build_author_collection_resources(
    property_mappings: PropertyMappingRegistry,
) -> list[dict[str, Any]]:
    """Author collection resource descriptors bound to a registry."""

    async def get_author_collection_handler(author_ids: str) -> dict[str, Any]:
        """Client requests library://authorcollections/(id1,id2)."""
        try:
            ids = parse_author_ids(author_ids)
            with session_scope() as session:
                return {"authors": get_author_collection(session, property_mappings, ids)}
        except (URIParseError, NotFoundError) as e:
            raise ResourceError(str(e)) from e
        except Exception as e:
            logger.exception("Error in author collection resource")
            raise ResourceError(f"Failed to retrieve author collection: {e!s}") from e

    return [
        {
            "uri_template": "library://authorcollections/{author_ids}",
            "name": "Author Collection",
            "description": (
                "Several authors by id, written as a parenthesised comma-separated "
                "list: library://authorcollections/(id1,id2)."
            ),
            "mime_type": "application/json",
            "handler": get_author_collection_handler,
        }
    ]
