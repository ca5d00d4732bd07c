"""Author Tools - Query and Create Authors

- browse_authors: filter, search, sort, page and shape the author collection
- get_author: one author, with Accept-style representation negotiation
- create_author: create an author (and courses) from a creation payload
- create_author_collection: create several authors in one transaction

Usage: tool.call("browse_authors", {"arguments": {"orderBy": "age desc", "fields": "id,name"}})
"""

import logging
from typing import Any
from uuid import UUID

from pydantic import Field

from ..database.session import session_scope
from ..media_types import negotiate_author_representation
from ..models.base import ResourceModel
from ..models.links import AuthorsResourceParameters
from ..resources.author_collections import create_author_collection
from ..resources.authors import create_author, get_author_representation, get_authors_page
from ..shaping import PropertyMappingRegistry
from .responses import (
    CLIENT_ERRORS,
    client_error_response,
    success_response,
    unexpected_error_response,
)

logger = logging.getLogger(__name__)


class GetAuthorInput(ResourceModel):
    """Input schema for the get_author tool."""

    author_id: UUID = Field(..., description="Id of the author")
    fields: str | None = Field(
        default=None,
        description="Comma-separated fields to return (e.g. 'id,name')",
        examples=["id,name", "firstName,lastName"],
    )
    accept: str | None = Field(
        default=None,
        description=(
            "Media type of the representation: application/json, "
            "application/vnd.marvin.hateoas+json, "
            "application/vnd.marvin.author.full+json, ..."
        ),
    )


class CreateAuthorInput(ResourceModel):
    """Input schema for the create_author tool."""

    author: dict[str, Any] = Field(
        ...,
        description="Author payload: firstName, lastName, dateOfBirth, mainCategory, courses",
    )
    content_type: str | None = Field(
        default=None,
        description=(
            "Payload media type; application/vnd.marvin.authorforcreationwithdateofdeath+json "
            "also accepts dateOfDeath"
        ),
    )


class CreateAuthorCollectionInput(ResourceModel):
    """Input schema for the create_author_collection tool."""

    authors: list[dict[str, Any]] = Field(..., min_length=1, description="Author payloads")


def build_author_tools(property_mappings: PropertyMappingRegistry) -> list[dict[str, Any]]:
    """Author tool descriptors bound to a property mapping registry."""

    async def browse_authors_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Page through authors.

        Client calls: tool.call("browse_authors", {"arguments": {"pageNumber": 2}})
        """
        try:
            params = AuthorsResourceParameters.model_validate(arguments)
            with session_scope() as session:
                envelope = get_authors_page(session, property_mappings, params)
        except CLIENT_ERRORS as e:
            return client_error_response(e)
        except Exception as e:
            return unexpected_error_response("browse_authors", e)

        pagination = envelope["pagination"]
        if not envelope["value"]:
            message = "No authors found matching your criteria."
        else:
            message = (
                f"Found {pagination['totalCount']} author(s) "
                f"(page {pagination['currentPage']} of {pagination['totalPages']})"
            )
        return success_response(message, envelope)

    async def get_author_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Get one author.

        Client calls: tool.call("get_author", {"arguments": {"authorId": "..."}})
        """
        try:
            params = GetAuthorInput.model_validate(arguments)
            representation = negotiate_author_representation(params.accept)
            with session_scope() as session:
                author = get_author_representation(
                    session, property_mappings, params.author_id, params.fields, representation
                )
        except CLIENT_ERRORS as e:
            return client_error_response(e)
        except Exception as e:
            return unexpected_error_response("get_author", e)

        return success_response(f"Author {params.author_id}", author)

    async def create_author_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Create an author.

        Client calls: tool.call("create_author", {"arguments": {"author": {...}}})
        """
        try:
            params = CreateAuthorInput.model_validate(arguments)
            with session_scope() as session:
                author = create_author(
                    session, property_mappings, params.author, params.content_type
                )
        except CLIENT_ERRORS as e:
            return client_error_response(e)
        except Exception as e:
            return unexpected_error_response("create_author", e)

        return success_response(f"Created author {author['id']}", author)

    async def create_author_collection_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Create several authors at once.

        Client calls: tool.call("create_author_collection", {"arguments": {"authors": [...]}})
        """
        try:
            params = CreateAuthorCollectionInput.model_validate(arguments)
            with session_scope() as session:
                result = create_author_collection(session, property_mappings, params.authors)
        except CLIENT_ERRORS as e:
            return client_error_response(e)
        except Exception as e:
            return unexpected_error_response("create_author_collection", e)

        return success_response(f"Created {len(result['value'])} author(s)", result)

    return [
        {
            "name": "browse_authors",
            "description": (
                "Browse authors with filtering (mainCategory), search (searchQuery), "
                "sorting (orderBy, e.g. 'name' or 'age desc'), paging (pageNumber, "
                "pageSize up to 20) and data shaping (fields, e.g. 'id,name'). "
                "Results include links and pagination metadata."
            ),
            "handler": browse_authors_handler,
        },
        {
            "name": "get_author",
            "description": (
                "Get one author. 'accept' selects the friendly or full representation, "
                "with or without links; 'fields' selects the returned fields."
            ),
            "handler": get_author_handler,
        },
        {
            "name": "create_author",
            "description": (
                "Create an author, optionally with courses. Use the "
                "authorforcreationwithdateofdeath content type to include a date of death."
            ),
            "handler": create_author_handler,
        },
        {
            "name": "create_author_collection",
            "description": "Create several authors in one transaction.",
            "handler": create_author_collection_handler,
        },
    ]
