"""
Database package for the Course Library MCP Server.

- schema.py: SQLAlchemy tables (storage field names live here)
- session.py: engine, sessions and transactional scopes
- repositories: data access returning public resource models
"""

from .author_repository import AuthorRepository
from .course_repository import CourseRepository
from .repository import (
    BaseRepository,
    NotFoundError,
    PaginatedResponse,
    PaginationParams,
    RepositoryException,
)
from .schema import Author, Base, Course
from .session import (
    DatabaseManager,
    get_db_manager,
    mcp_safe_commit,
    mcp_safe_query,
    session_scope,
)

__all__ = [
    "Author",
    "AuthorRepository",
    "Base",
    "BaseRepository",
    "Course",
    "CourseRepository",
    "DatabaseManager",
    "NotFoundError",
    "PaginatedResponse",
    "PaginationParams",
    "RepositoryException",
    "get_db_manager",
    "mcp_safe_commit",
    "mcp_safe_query",
    "session_scope",
]
