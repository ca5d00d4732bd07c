"""Course Tools - Manage an Author's Courses

- create_course_for_author: add a course to an author
- update_course_for_author: replace a course's title and description
- delete_course_for_author: remove a course

A course's title and description must differ.
"""

import logging
from typing import Any
from uuid import UUID

from pydantic import Field

from ..database.session import session_scope
from ..models.base import ResourceModel
from ..resources.courses import (
    create_course_for_author,
    delete_course_for_author,
    update_course_for_author,
)
from .responses import (
    CLIENT_ERRORS,
    client_error_response,
    success_response,
    unexpected_error_response,
)

logger = logging.getLogger(__name__)


class CourseLocatorInput(ResourceModel):
    """Identifies one course of one author."""

    author_id: UUID = Field(..., description="Id of the author teaching the course")
    course_id: UUID = Field(..., description="Id of the course")


class CreateCourseInput(ResourceModel):
    """Input schema for the create_course_for_author tool."""

    author_id: UUID = Field(..., description="Id of the author teaching the course")
    course: dict[str, Any] = Field(..., description="Course payload: title, description")


class UpdateCourseInput(CourseLocatorInput):
    """Input schema for the update_course_for_author tool."""

    course: dict[str, Any] = Field(
        ..., description="Replacement title and description (both required)"
    )


async def create_course_for_author_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Add a course to an author.

    Client calls: tool.call("create_course_for_author", {"arguments": {...}})
    """
    try:
        params = CreateCourseInput.model_validate(arguments)
        with session_scope() as session:
            course = create_course_for_author(session, params.author_id, params.course)
    except CLIENT_ERRORS as e:
        return client_error_response(e)
    except Exception as e:
        return unexpected_error_response("create_course_for_author", e)

    return success_response(f"Created course '{course['title']}'", course)


async def update_course_for_author_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Replace a course."""
    try:
        params = UpdateCourseInput.model_validate(arguments)
        with session_scope() as session:
            course = update_course_for_author(
                session, params.author_id, params.course_id, params.course
            )
    except CLIENT_ERRORS as e:
        return client_error_response(e)
    except Exception as e:
        return unexpected_error_response("update_course_for_author", e)

    return success_response(f"Updated course '{course['title']}'", course)


async def delete_course_for_author_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    try:
        params = CourseLocatorInput.model_validate(arguments)
        with session_scope() as session:
            delete_course_for_author(session, params.author_id, params.course_id)
    except CLIENT_ERRORS as e:
        return client_error_response(e)
    except Exception as e:
        return unexpected_error_response("delete_course_for_author", e)

    return success_response(
        f"Deleted course {params.course_id}",
        {"authorId": str(params.author_id), "courseId": str(params.course_id)},
    )


create_course_for_author_tool = {
    "name": "create_course_for_author",
    "description": (
        "Add a course to an author. Title is required (max 100 characters), "
        "description is optional (max 1500) and must differ from the title."
    ),
    "handler": create_course_for_author_handler,
}

update_course_for_author_tool = {
    "name": "update_course_for_author",
    "description": "Replace the title and description of one of an author's courses.",
    "handler": update_course_for_author_handler,
}

delete_course_for_author_tool = {
    "name": "delete_course_for_author",
    "description": "Delete one of an author's courses.",
    "handler": delete_course_for_author_handler,
}

course_tools = [
    create_course_for_author_tool,
    update_course_for_author_tool,
    delete_course_for_author_tool,
]
