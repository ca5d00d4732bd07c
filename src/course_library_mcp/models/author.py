"""
Author resources for the Course Library MCP Server.

Two read representations exist, chosen by media type:
- AuthorDto ("friendly"): id, name, age, mainCategory
- AuthorFullDto ("full"): id, firstName, lastName, dateOfBirth, mainCategory

Input models accept an author with optional nested courses, with or without a
date of death.
"""

from datetime import date
from uuid import UUID

from pydantic import Field, ValidationInfo, field_validator

from .base import ResourceModel
from .course import CourseForCreationDto


def calculate_age(
    date_of_birth: date, date_of_death: date | None = None, today: date | None = None
) -> int:
    """Age in whole years, at death or today."""
    end_date = date_of_death or today or date.today()
    age = end_date.year - date_of_birth.year

    # Birthday not yet reached in the final year
    if (end_date.month, end_date.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1

    return age


class AuthorDto(ResourceModel):
    """Friendly author representation."""

    id: UUID = Field(..., description="Unique identifier for the author")
    name: str = Field(
        ..., description="First and last name", examples=["Berry Griffin Beak Eldritch"]
    )
    age: int = Field(..., description="Age in years, at death for deceased authors")
    main_category: str = Field(..., description="Main teaching category", examples=["Ships"])

    @classmethod
    def from_entity(cls, author, today: date | None = None) -> "AuthorDto":
        """Build from an ``authors`` row (or anything with the same attributes)."""
        return cls(
            id=author.id,
            name=f"{author.first_name} {author.last_name}",
            age=calculate_age(author.date_of_birth, author.date_of_death, today),
            main_category=author.main_category,
        )


class AuthorFullDto(ResourceModel):
    """Full author representation."""

    id: UUID
    first_name: str
    last_name: str
    date_of_birth: date
    main_category: str

    @classmethod
    def from_entity(cls, author) -> "AuthorFullDto":
        return cls.model_validate(author)


class AuthorForCreationDto(ResourceModel):
    """Payload for creating an author, optionally with courses."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    date_of_birth: date
    main_category: str = Field(..., min_length=1, max_length=50)
    courses: list[CourseForCreationDto] = Field(default_factory=list)

    @field_validator("first_name", "last_name", "main_category")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Value cannot be blank")
        return v

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return v


class AuthorForCreationWithDateOfDeathDto(AuthorForCreationDto):
    """Creation payload for an author who has passed away."""

    date_of_death: date | None = None

    @field_validator("date_of_death")
    @classmethod
    def validate_date_of_death(cls, v: date | None, info: ValidationInfo) -> date | None:
        if v is None:
            return v
        if v > date.today():
            raise ValueError("Date of death cannot be in the future")
        birth_date = info.data.get("date_of_birth")
        if birth_date and v < birth_date:
            raise ValueError("Date of death cannot be before date of birth")
        return v
