"""HATEOAS link and resource query models."""

import enum

from pydantic import ConfigDict, Field, field_validator

from ..config import get_config
from .base import ResourceModel


class LinkDto(ResourceModel):
    """A (relation, href, method) triple describing an available action."""

    model_config = ConfigDict(frozen=True)

    href: str
    rel: str
    method: str


class ResourceUriType(str, enum.Enum):
    """Which page of a collection a link points at."""

    PREVIOUS_PAGE = "previous_page"
    NEXT_PAGE = "next_page"
    CURRENT = "current"


class AuthorsResourceParameters(ResourceModel):
    """Query parameters for the author collection.

    ``page_size`` is clamped to the configured maximum instead of rejected.
    """

    main_category: str | None = None
    search_query: str | None = None
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default_factory=lambda: get_config().default_page_size, ge=1)
    order_by: str | None = "name"
    fields: str | None = None

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, v: int) -> int:
        return min(v, get_config().max_page_size)

    @field_validator("main_category", "search_query", "fields", "order_by")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v.strip() if v is not None else v
