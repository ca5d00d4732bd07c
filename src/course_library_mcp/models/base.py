"""Shared base for public resource models.

Resources use snake_case attributes in Python and camelCase names on the
wire (``main_category`` <-> ``mainCategory``). Both spellings are accepted on
input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel

_JSON_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


class ResourceModel(BaseModel):
    """Base class for DTOs exchanged with clients."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict:
        """Dump with camelCase keys, JSON-compatible values."""
        return self.model_dump(mode="json", by_alias=True)


def to_jsonable(value: Any) -> Any:
    """Convert shaped data (UUIDs, dates, nested models) to JSON-compatible values."""
    return _JSON_ADAPTER.dump_python(value, mode="json", by_alias=True)
