"""Course Resources - Courses Through Their Author

Courses are only reachable through the author that teaches them.

Resources:
- library://authors/{author_id}/courses - All courses of an author
- library://authors/{author_id}/courses/{course_id} - One course
"""

import logging
from typing import Any
from uuid import UUID

from fastmcp.exceptions import ResourceError
from sqlalchemy.orm import Session

from ..database.course_repository import CourseRepository
from ..database.repository import NotFoundError
from ..database.session import session_scope
from ..models.course import CourseForCreationDto, CourseForUpdateDto
from .uri_utils import URIParseError, parse_uuid

logger = logging.getLogger(__name__)


def _author_courses(session: Session, author_id: UUID) -> CourseRepository:
    repo = CourseRepository(session)
    if not repo.author_exists(author_id):
        raise NotFoundError(f"Author not found: {author_id}")
    return repo


def get_courses_for_author(session: Session, author_id: UUID) -> list[dict[str, Any]]:
    """
    All courses of an author.

    Raises:
        NotFoundError: If the author does not exist
    """
    courses = _author_courses(session, author_id).get_courses_for_author(author_id)
    return [course.to_wire() for course in courses]


def get_course_for_author(session: Session, author_id: UUID, course_id: UUID) -> dict[str, Any]:
    """
    One course of an author.

    Raises:
        NotFoundError: If the author or the course does not exist
    """
    course = _author_courses(session, author_id).get_course(author_id, course_id)
    if course is None:
        raise NotFoundError(f"Course not found: {course_id}")
    return course.to_wire()


def create_course_for_author(
    session: Session, author_id: UUID, payload: dict[str, Any]
) -> dict[str, Any]:
    """
    Add a course to an author.

    Raises:
        pydantic.ValidationError: If the payload is invalid
        NotFoundError: If the author does not exist
    """
    data = CourseForCreationDto.model_validate(payload)
    course = _author_courses(session, author_id).create_course_for_author(author_id, data)
    logger.info("Created course %s for author %s", course.id, author_id)
    return course.to_wire()


def update_course_for_author(
    session: Session, author_id: UUID, course_id: UUID, payload: dict[str, Any]
) -> dict[str, Any]:
    """
    Replace a course's title and description.

    Raises:
        pydantic.ValidationError: If the payload is invalid
        NotFoundError: If the author or the course does not exist
    """
    data = CourseForUpdateDto.model_validate(payload)
    course = _author_courses(session, author_id).update_course(author_id, course_id, data)
    if course is None:
        raise NotFoundError(f"Course not found: {course_id}")
    return course.to_wire()


def delete_course_for_author(session: Session, author_id: UUID, course_id: UUID) -> None:
    """
    Delete a course.

    Raises:
        NotFoundError: If the author or the course does not exist
    """
    if not _author_courses(session, author_id).delete_course(author_id, course_id):
        raise NotFoundError(f"Course not found: {course_id}")
    logger.info("Deleted course %s of author %s", course_id, author_id)


# =============================================================================
# RESOURCE HANDLERS
# =============================================================================


async def get_courses_for_author_handler(author_id: str) -> dict[str, Any]:
    """Client requests library://authors/{author_id}/courses."""
    try:
        author_uuid = parse_uuid(author_id, "author id")
        with session_scope() as session:
            return {"courses": get_courses_for_author(session, author_uuid)}
    except (URIParseError, NotFoundError) as e:
        raise ResourceError(str(e)) from e
    except Exception as e:
        logger.exception("Error in author courses resource")
        raise ResourceError(f"Failed to retrieve courses: {e!s}") from e


async def get_course_for_author_handler(author_id: str, course_id: str) -> dict[str, Any]:
    """Client requests library://authors/{author_id}/courses/{course_id}."""
    try:
        author_uuid = parse_uuid(author_id, "author id")
        course_uuid = parse_uuid(course_id, "course id")
        with session_scope() as session:
            return get_course_for_author(session, author_uuid, course_uuid)
    except (URIParseError, NotFoundError) as e:
        raise ResourceError(str(e)) from e
    except Exception as e:
        logger.exception("Error in course resource")
        raise ResourceError(f"Failed to retrieve course: {e!s}") from e


course_resources = [
    {
        "uri_template": "library://authors/{author_id}/courses",
        "name": "Author Courses",
        "description": "All courses taught by an author, ordered by title.",
        "mime_type": "application/json",
        "handler": get_courses_for_author_handler,
    },
    {
        "uri_template": "library://authors/{author_id}/courses/{course_id}",
        "name": "Course Details",
        "description": "One course (id, title, description, authorId) of an author.",
        "mime_type": "application/json",
        "handler": get_course_for_author_handler,
    },
]
