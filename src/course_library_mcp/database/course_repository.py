"""
Course repository implementation for the Course Library MCP Server.

Courses are always addressed through their author: every lookup takes the
author id as well as the course id, so a course cannot be read or changed
through the wrong author.
"""

from uuid import UUID

from sqlalchemy import func, select

from ..database.schema import Author as AuthorDB
from ..database.schema import Course as CourseDB
from ..database.session import mcp_safe_commit, mcp_safe_query
from ..models.course import CourseDto, CourseForCreationDto, CourseForUpdateDto
from .repository import BaseRepository


class CourseRepository(BaseRepository[CourseDB, CourseDto]):
    """Repository for course data access."""

    @property
    def model_class(self):
        return CourseDB

    def _to_response_model(self, db_obj: CourseDB) -> CourseDto:
        return CourseDto.model_validate(db_obj)

    def _get_course_entity(self, author_id: UUID, course_id: UUID) -> CourseDB | None:
        query = select(CourseDB).where(CourseDB.id == course_id, CourseDB.author_id == author_id)
        return mcp_safe_query(
            self.session,
            lambda s: s.execute(query).scalar_one_or_none(),
            "Failed to get course",
        )

    def author_exists(self, author_id: UUID) -> bool:
        """Whether the owning author exists; courses are only reachable through one."""
        query = select(func.count()).select_from(AuthorDB).where(AuthorDB.id == author_id)
        count = mcp_safe_query(
            self.session, lambda s: s.execute(query).scalar(), "Failed to check author existence"
        )
        return count > 0

    def get_courses_for_author(self, author_id: UUID) -> list[CourseDto]:
        """All courses of an author, ordered by title."""
        query = select(CourseDB).where(CourseDB.author_id == author_id).order_by(CourseDB.title)
        rows = mcp_safe_query(
            self.session,
            lambda s: s.execute(query).scalars().all(),
            "Failed to get courses for author",
        )
        return [self._to_response_model(row) for row in rows]

    def get_course(self, author_id: UUID, course_id: UUID) -> CourseDto | None:
        db_course = self._get_course_entity(author_id, course_id)
        if db_course is None:
            return None
        return self._to_response_model(db_course)

    def create_course_for_author(self, author_id: UUID, data: CourseForCreationDto) -> CourseDto:
        """Add a course to an existing author."""
        db_course = CourseDB(author_id=author_id, title=data.title, description=data.description)
        self.session.add(db_course)
        mcp_safe_commit(self.session, "create course")
        self.session.refresh(db_course)
        return self._to_response_model(db_course)

    def update_course(
        self, author_id: UUID, course_id: UUID, data: CourseForUpdateDto
    ) -> CourseDto | None:
        """
        Replace a course's title and description.

        Returns:
            The updated course, or None if the author has no such course
        """
        db_course = self._get_course_entity(author_id, course_id)
        if db_course is None:
            return None

        db_course.title = data.title
        db_course.description = data.description
        mcp_safe_commit(self.session, "update course")
        self.session.refresh(db_course)
        return self._to_response_model(db_course)

    def delete_course(self, author_id: UUID, course_id: UUID) -> bool:
        """
        Delete one of an author's courses.

        Returns:
            True if deleted, False if the author has no such course
        """
        db_course = self._get_course_entity(author_id, course_id)
        if db_course is None:
            return False

        self.session.delete(db_course)
        mcp_safe_commit(self.session, "delete course")
        return True
