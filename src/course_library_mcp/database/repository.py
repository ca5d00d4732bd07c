"""
Repository pattern implementation for the Course Library MCP Server.

Repositories keep SQLAlchemy out of resource and tool handlers. They return
Pydantic models, and list operations return ``PaginatedResponse`` with the
metadata clients need to page through a collection.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ..database.schema import Base
from ..database.session import mcp_safe_query

ModelType = TypeVar("ModelType", bound=Base)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)


class RepositoryException(Exception):
    """Base exception for repository operations."""


class NotFoundError(RepositoryException):
    """Raised when an entity is not found."""


class PaginationParams(BaseModel):
    """Standard pagination parameters for list operations."""

    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        """Calculate offset for SQL queries."""
        return (self.page - 1) * self.page_size

    def validate_params(self) -> None:
        """Validate pagination parameters."""
        if self.page < 1:
            raise ValueError("Page must be >= 1")
        if self.page_size < 1 or self.page_size > 100:
            raise ValueError("Page size must be between 1 and 100")


class PaginatedResponse(BaseModel, Generic[ResponseSchemaType]):
    """One page of a collection plus its paging metadata."""

    items: list[ResponseSchemaType]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def create(
        cls, items: list[Any], total: int, pagination: PaginationParams
    ) -> "PaginatedResponse[ResponseSchemaType]":
        return cls(
            items=items,
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
            total_pages=(total + pagination.page_size - 1) // pagination.page_size,
            has_next=pagination.page * pagination.page_size < total,
            has_previous=pagination.page > 1,
        )

    def pagination_metadata(self) -> dict[str, int]:
        """Paging summary sent alongside a collection response."""
        return {
            "totalCount": self.total,
            "pageSize": self.page_size,
            "currentPage": self.page,
            "totalPages": self.total_pages,
        }


class BaseRepository(ABC, Generic[ModelType, ResponseSchemaType]):
    """
    Common read operations shared by all repositories.

    Every query goes through mcp_safe_query / mcp_safe_commit so driver
    errors surface as readable messages.
    """

    def __init__(self, session: Session):
        self.session = session

    @property
    @abstractmethod
    def model_class(self) -> type[ModelType]:
        """Return the SQLAlchemy model class."""

    @abstractmethod
    def _to_response_model(self, db_obj: ModelType) -> ResponseSchemaType:
        """Convert a database row into its response model."""

    def _get_entity(self, id: UUID) -> ModelType | None:
        query = select(self.model_class).where(self.model_class.id == id)
        return mcp_safe_query(
            self.session,
            lambda s: s.execute(query).scalar_one_or_none(),
            f"Failed to get {self.model_class.__name__} by ID",
        )

    def get_by_id(self, id: UUID) -> ResponseSchemaType | None:
        """Get entity by ID, or None if not found."""
        db_obj = self._get_entity(id)
        if db_obj is None:
            return None
        return self._to_response_model(db_obj)

    def _paginate(
        self, query: Select, pagination: PaginationParams
    ) -> tuple[list[ModelType], int]:
        """Run ``query`` for one page and count the full result set."""
        pagination.validate_params()

        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = (
            mcp_safe_query(
                self.session,
                lambda s: s.execute(count_query).scalar(),
                "Failed to get total count",
            )
            or 0
        )

        page_query = query.offset(pagination.offset).limit(pagination.page_size)
        rows = mcp_safe_query(
            self.session,
            lambda s: s.execute(page_query).scalars().all(),
            "Failed to get paginated results",
        )
        return list(rows), total
