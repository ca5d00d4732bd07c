"""Author Resources - Shaped, Linked Author Views

Read access to authors. Clients choose the fields they want, sort by public
field names and follow links between pages and related resources.

Resources:
- library://authors - First page of authors, default order and fields
- library://authors/{author_id} - One author, friendly representation with links

The service functions below do the work for both resources and tools; the
tools expose the full query surface (fields, orderBy, paging, media types).
"""

import logging
from typing import Any
from uuid import UUID

from fastmcp.exceptions import ResourceError
from sqlalchemy.orm import Session

from ..database.author_repository import AuthorRepository
from ..database.repository import NotFoundError
from ..database.schema import Author as AuthorDB
from ..database.session import session_scope
from ..media_types import AuthorRepresentation, select_author_creation_model
from ..models.author import AuthorDto, AuthorFullDto
from ..models.base import to_jsonable
from ..models.links import AuthorsResourceParameters, LinkDto
from ..shaping import (
    InvalidFieldsError,
    InvalidOrderByError,
    PropertyMappingRegistry,
    has_properties,
    parse_order_by,
    shape_data,
)
from .links import create_links_for_author, create_links_for_authors
from .uri_utils import URIParseError, parse_uuid

logger = logging.getLogger(__name__)

AUTHORS_MIME_TYPE = "application/json"


def _wire_links(links: list[LinkDto]) -> list[dict[str, Any]]:
    return [link.to_wire() for link in links]


def ensure_fields_exist(resource_type: type, fields: str | None) -> None:
    """Reject a field selection naming fields ``resource_type`` does not declare.

    Raises:
        InvalidFieldsError: If a requested field does not exist
    """
    if not has_properties(resource_type, fields):
        raise InvalidFieldsError(
            f"Not all requested data shaping fields exist on the resource: {fields}"
        )


def get_authors_page(
    session: Session,
    property_mappings: PropertyMappingRegistry,
    params: AuthorsResourceParameters,
) -> dict[str, Any]:
    """
    One page of shaped authors with collection and per-author links.

    Returns:
        ``{"value": [...], "links": [...], "pagination": {...}}``. Each value
        holds the requested fields followed by its own ``links``, which
        point at the full author rather than the requested fields.

    Raises:
        InvalidOrderByError: If orderBy names a field without a mapping
        InvalidFieldsError: If fields names a field AuthorDto does not declare
    """
    mapping = property_mappings.get_mapping(AuthorDto, AuthorDB)
    unknown = [
        clause.field_name
        for clause in parse_order_by(params.order_by)
        if clause.field_name not in mapping
    ]
    if unknown:
        raise InvalidOrderByError(params.order_by or "", unknown)
    ensure_fields_exist(AuthorDto, params.fields)

    page = AuthorRepository(session, property_mappings).get_authors(params)

    shaped_authors = shape_data(page.items, params.fields, resource_type=AuthorDto)
    value = []
    for author, shaped in zip(page.items, shaped_authors, strict=True):
        shaped = to_jsonable(shaped)
        shaped["links"] = _wire_links(create_links_for_author(author.id))
        value.append(shaped)

    return {
        "value": value,
        "links": _wire_links(
            create_links_for_authors(params, page.has_next, page.has_previous)
        ),
        "pagination": page.pagination_metadata(),
    }


def get_author_representation(
    session: Session,
    property_mappings: PropertyMappingRegistry,
    author_id: UUID,
    fields: str | None = None,
    representation: AuthorRepresentation | None = None,
) -> dict[str, Any]:
    """
    One author, shaped, in the given representation (friendly without links
    by default). Negotiate it from an Accept value first with
    negotiate_author_representation.

    Fields are checked against the representation's own type, so ``firstName``
    is valid for the full representation and ``name`` for the friendly one.

    Raises:
        InvalidFieldsError: If fields names an undeclared field
        NotFoundError: If the author does not exist
    """
    representation = representation or AuthorRepresentation()
    resource_type = AuthorFullDto if representation.full else AuthorDto
    ensure_fields_exist(resource_type, fields)

    repo = AuthorRepository(session, property_mappings)
    author = repo.get_author_full(author_id) if representation.full else repo.get_author(author_id)
    if author is None:
        raise NotFoundError(f"Author not found: {author_id}")

    return _with_links(author, fields, representation)


def _with_links(
    author: AuthorDto | AuthorFullDto,
    fields: str | None,
    representation: AuthorRepresentation,
) -> dict[str, Any]:
    shaped = to_jsonable(shape_data(author, fields))
    if representation.include_links:
        shaped["links"] = _wire_links(create_links_for_author(author.id, fields))
    return shaped


def create_author(
    session: Session,
    property_mappings: PropertyMappingRegistry,
    payload: dict[str, Any],
    content_type: str | None = None,
) -> dict[str, Any]:
    """
    Create an author (with nested courses) and return it with links.

    The Content-Type value picks the payload model; the vendor
    ``authorforcreationwithdateofdeath`` type also accepts ``dateOfDeath``.

    Raises:
        UnsupportedMediaTypeError: If the Content-Type cannot be consumed
        pydantic.ValidationError: If the payload is invalid
        RepositoryException: If the author cannot be stored
    """
    model = select_author_creation_model(content_type)
    data = model.model_validate(payload)

    author = AuthorRepository(session, property_mappings).create_author(data)
    logger.info("Created author %s (%s)", author.id, author.name)
    return _with_links(author, None, AuthorRepresentation(include_links=True))


# =============================================================================
# RESOURCE HANDLERS
# =============================================================================


def build_author_resources(property_mappings: PropertyMappingRegistry) -> list[dict[str, Any]]:
    """Author resource descriptors bound to a property mapping registry."""

    async def list_authors_handler() -> dict[str, Any]:
        """First page of authors in the default order.

        Client requests library://authors; use the browse_authors tool for
        fields, sorting, filtering and other pages.
        """
        try:
            with session_scope() as session:
                return get_authors_page(session, property_mappings, AuthorsResourceParameters())
        except Exception as e:
            logger.exception("Error in authors resource")
            raise ResourceError(f"Failed to retrieve authors: {e!s}") from e

    async def get_author_handler(author_id: str) -> dict[str, Any]:
        """One author with links.

        Client requests library://authors/{author_id}.
        """
        try:
            author_uuid = parse_uuid(author_id, "author id")
            with session_scope() as session:
                return get_author_representation(
                    session,
                    property_mappings,
                    author_uuid,
                    representation=AuthorRepresentation(include_links=True),
                )
        except (URIParseError, NotFoundError) as e:
            raise ResourceError(str(e)) from e
        except Exception as e:
            logger.exception("Error in author resource")
            raise ResourceError(f"Failed to retrieve author: {e!s}") from e

    return [
        {
            "uri": "library://authors",
            "name": "Author List",
            "description": (
                "First page of authors ordered by name, each with links. "
                "Includes collection links and pagination metadata."
            ),
            "mime_type": AUTHORS_MIME_TYPE,
            "handler": list_authors_handler,
        },
        {
            "uri_template": "library://authors/{author_id}",
            "name": "Author Details",
            "description": "One author (id, name, age, mainCategory) with links.",
            "mime_type": AUTHORS_MIME_TYPE,
            "handler": get_author_handler,
        },
    ]
