"""
MCP Tools for the Course Library Server.

Tools are the write side of the server plus the full author query surface
(field selection, sorting, paging, media types) that plain resource URIs
cannot express. Each tool is a dictionary with a name, description and an async
handler taking a single ``arguments`` object, which the handler validates
with its own pydantic input model. Failures come back as results with
``isError`` and an HTTP-style ``status``.
"""

from typing import Any

from ..shaping import PropertyMappingRegistry
from .authors import build_author_tools
from .courses import (
    course_tools,
    create_course_for_author_tool,
    delete_course_for_author_tool,
    update_course_for_author_tool,
)


def build_tools(property_mappings: PropertyMappingRegistry) -> list[dict[str, Any]]:
    """Every tool descriptor, ready for server registration."""
    return build_author_tools(property_mappings) + course_tools


__all__ = [
    "build_author_tools",
    "build_tools",
    "course_tools",
    "create_course_for_author_tool",
    "delete_course_for_author_tool",
    "update_course_for_author_tool",
]
