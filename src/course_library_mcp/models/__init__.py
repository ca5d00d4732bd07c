"""
Course Library resource models.

Pydantic models for everything clients send or receive. Attributes are
snake_case in Python and camelCase on the wire.

- Author: friendly and full representations, creation payloads
- Course: read model plus creation/update payloads
- Links: HATEOAS links and collection query parameters
"""

from .author import (
    AuthorDto,
    AuthorForCreationDto,
    AuthorForCreationWithDateOfDeathDto,
    AuthorFullDto,
    calculate_age,
)
from .base import ResourceModel, to_jsonable
from .course import (
    CourseDto,
    CourseForCreationDto,
    CourseForManipulationDto,
    CourseForUpdateDto,
)
from .links import AuthorsResourceParameters, LinkDto, ResourceUriType

__all__ = [
    "AuthorDto",
    "AuthorForCreationDto",
    "AuthorForCreationWithDateOfDeathDto",
    "AuthorFullDto",
    "AuthorsResourceParameters",
    "CourseDto",
    "CourseForCreationDto",
    "CourseForManipulationDto",
    "CourseForUpdateDto",
    "LinkDto",
    "ResourceModel",
    "ResourceUriType",
    "calculate_age",
    "to_jsonable",
]
