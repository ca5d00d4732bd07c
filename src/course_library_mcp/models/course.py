"""Course resources for the Course Library MCP Server."""

from uuid import UUID

from pydantic import Field, model_validator

from .base import ResourceModel


class CourseDto(ResourceModel):
    """A course as returned to clients."""

    id: UUID
    title: str
    description: str | None = None
    author_id: UUID


class CourseForManipulationDto(ResourceModel):
    """Shared rules for course creation and update payloads."""

    title: str = Field(..., min_length=1, max_length=100, description="Course title")
    description: str = Field(default="", max_length=1500, description="Course description")

    @model_validator(mode="after")
    def title_must_differ_from_description(self) -> "CourseForManipulationDto":
        if self.title == self.description:
            raise ValueError("The provided description should be different from the title.")
        return self


class CourseForCreationDto(CourseForManipulationDto):
    """Payload for creating a course."""


class CourseForUpdateDto(CourseForManipulationDto):
    """Payload for replacing a course; a description is required."""

    description: str = Field(..., min_length=1, max_length=1500)
