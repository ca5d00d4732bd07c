"""HATEOAS links for author resources.

Links tell a client what it can do next with a resource: read it again with
the same field selection, reach its courses, or move between collection
pages without building URIs itself.
"""

from uuid import UUID

from ..models.links import AuthorsResourceParameters, LinkDto, ResourceUriType
from .uri_utils import build_library_uri


def create_links_for_author(author_id: UUID, fields: str | None = None) -> list[LinkDto]:
    """Links for a single author: self, create_course_for_author and courses."""
    fields = fields or None
    return [
        LinkDto(
            href=build_library_uri("authors", author_id, query={"fields": fields}),
            rel="self",
            method="GET",
        ),
        LinkDto(
            href=build_library_uri("authors", author_id, "courses"),
            rel="create_course_for_author",
            method="POST",
        ),
        LinkDto(
            href=build_library_uri("authors", author_id, "courses"),
            rel="courses",
            method="GET",
        ),
    ]


def create_authors_resource_uri(
    params: AuthorsResourceParameters, uri_type: ResourceUriType
) -> str:
    """URI of the current, previous or next page of an author collection.

    Every query parameter of the current request is carried over so the
    filter, search, sort and field selection stay the same across pages.
    """
    page_number = params.page_number
    if uri_type is ResourceUriType.PREVIOUS_PAGE:
        page_number -= 1
    elif uri_type is ResourceUriType.NEXT_PAGE:
        page_number += 1

    return build_library_uri(
        "authors",
        query={
            "fields": params.fields,
            "orderBy": params.order_by,
            "pageNumber": page_number,
            "pageSize": params.page_size,
            "mainCategory": params.main_category,
            "searchQuery": params.search_query,
        },
    )


def create_links_for_authors(
    params: AuthorsResourceParameters, has_next: bool, has_previous: bool
) -> list[LinkDto]:
    """Collection links: self, plus nextPage/previousPage when those pages exist."""
    links = [
        LinkDto(
            href=create_authors_resource_uri(params, ResourceUriType.CURRENT),
            rel="self",
            method="GET",
        )
    ]
    if has_next:
        links.append(
            LinkDto(
                href=create_authors_resource_uri(params, ResourceUriType.NEXT_PAGE),
                rel="nextPage",
                method="GET",
            )
        )
    if has_previous:
        links.append(
            LinkDto(
                href=create_authors_resource_uri(params, ResourceUriType.PREVIOUS_PAGE),
                rel="previousPage",
                method="GET",
            )
        )
    return links
