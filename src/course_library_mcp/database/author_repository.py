"""
Author repository implementation for the Course Library MCP Server.

Supports:
1. **Collection reads**: filtering, searching, mapped sorting and pagination
2. **Single reads**: friendly (AuthorDto) and full (AuthorFullDto) shapes
3. **Creation**: authors with nested courses, one at a time or as a collection

Sorting goes through the property mapping registry: clients sort by public
AuthorDto fields (``name``, ``age``...) and the registry translates them into
``authors`` columns.
"""

import logging
from uuid import UUID

from sqlalchemy import or_, select

from ..database.schema import Author as AuthorDB
from ..database.schema import Course as CourseDB
from ..database.session import mcp_safe_commit, mcp_safe_query
from ..models.author import (
    AuthorDto,
    AuthorForCreationDto,
    AuthorForCreationWithDateOfDeathDto,
    AuthorFullDto,
)
from ..models.links import AuthorsResourceParameters
from ..shaping import PropertyMappingRegistry, apply_sort
from .repository import (
    BaseRepository,
    PaginatedResponse,
    PaginationParams,
    RepositoryException,
)

logger = logging.getLogger(__name__)


class AuthorRepository(BaseRepository[AuthorDB, AuthorDto]):
    """
    Repository for author data access.

    Args:
        session: Database session.
        property_mappings: Registry used to translate order-by expressions.
    """

    def __init__(self, session, property_mappings: PropertyMappingRegistry):
        super().__init__(session)
        self.property_mappings = property_mappings

    @property
    def model_class(self):
        return AuthorDB

    def _to_response_model(self, db_obj: AuthorDB) -> AuthorDto:
        return AuthorDto.from_entity(db_obj)

    def get_authors(self, params: AuthorsResourceParameters) -> PaginatedResponse[AuthorDto]:
        """
        Get one page of authors.

        Args:
            params: Filter, search, sort and paging parameters. ``order_by``
                uses public AuthorDto field names.

        Returns:
            Paginated response with matching authors

        Raises:
            InvalidOrderByError: If the order-by expression names unmapped fields
        """
        query = select(AuthorDB)

        if params.main_category:
            query = query.where(AuthorDB.main_category == params.main_category.strip())

        if params.search_query:
            search_term = f"%{params.search_query.strip()}%"
            query = query.where(
                or_(
                    AuthorDB.main_category.ilike(search_term),
                    AuthorDB.first_name.ilike(search_term),
                    AuthorDB.last_name.ilike(search_term),
                )
            )

        if params.order_by:
            mapping = self.property_mappings.get_mapping(AuthorDto, AuthorDB)
            query = apply_sort(query, params.order_by, mapping, AuthorDB)

        # Stable paging when sort keys tie
        query = query.order_by(AuthorDB.id)

        pagination = PaginationParams(page=params.page_number, page_size=params.page_size)
        rows, total = self._paginate(query, pagination)

        logger.debug(
            "Fetched %d of %d authors (page %d, order_by=%r)",
            len(rows),
            total,
            pagination.page,
            params.order_by,
        )
        return PaginatedResponse[AuthorDto].create(
            [self._to_response_model(row) for row in rows], total, pagination
        )

    def get_author(self, author_id: UUID) -> AuthorDto | None:
        """Friendly representation of one author, or None."""
        return self.get_by_id(author_id)

    def get_author_full(self, author_id: UUID) -> AuthorFullDto | None:
        """Full representation of one author, or None."""
        db_author = self._get_entity(author_id)
        if db_author is None:
            return None
        return AuthorFullDto.from_entity(db_author)

    def get_authors_by_ids(self, author_ids: list[UUID]) -> list[AuthorDto]:
        """
        Get the authors with the given ids, in the requested order.

        Ids without an author are left out; callers compare lengths to
        detect missing authors.
        """
        if not author_ids:
            return []

        query = select(AuthorDB).where(AuthorDB.id.in_(author_ids))
        rows = mcp_safe_query(
            self.session,
            lambda s: s.execute(query).scalars().all(),
            "Failed to get author collection",
        )
        by_id = {row.id: row for row in rows}
        return [self._to_response_model(by_id[i]) for i in author_ids if i in by_id]

    def _build_entity(self, data: AuthorForCreationDto) -> AuthorDB:
        db_author = AuthorDB(
            first_name=data.first_name,
            last_name=data.last_name,
            date_of_birth=data.date_of_birth,
            main_category=data.main_category,
        )
        if isinstance(data, AuthorForCreationWithDateOfDeathDto):
            db_author.date_of_death = data.date_of_death
        db_author.courses = [
            CourseDB(title=course.title, description=course.description)
            for course in data.courses
        ]
        return db_author

    def create_author(self, data: AuthorForCreationDto) -> AuthorDto:
        """
        Create an author, including any nested courses.

        Raises:
            RepositoryException: If the author cannot be stored
        """
        return self.create_authors([data])[0]

    def create_authors(self, authors: list[AuthorForCreationDto]) -> list[AuthorDto]:
        """
        Create several authors in one transaction.

        Raises:
            RepositoryException: If any author cannot be stored
        """
        db_authors = [self._build_entity(data) for data in authors]
        try:
            self.session.add_all(db_authors)
            mcp_safe_commit(self.session, "create authors")
        except ValueError as e:
            raise RepositoryException(f"Failed to create authors: {e!s}") from e

        for db_author in db_authors:
            self.session.refresh(db_author)
        return [self._to_response_model(db_author) for db_author in db_authors]
