"""Field descriptors for shapeable resource types.

Data shaping needs, for every resource type, the ordered list of declared
fields and a way to read each one off an instance. Pydantic models and
dataclasses describe themselves; descriptors are derived once per type and
cached, so resolution costs nothing per request.

Canonical field names are the public (serialization) names: a pydantic field
``main_category`` with the camelCase alias ``mainCategory`` is exposed as
``mainCategory``. Lookups are case-insensitive and accept either the public
name or the Python attribute name.
"""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Iterator
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable

from pydantic import BaseModel

from .exceptions import FieldNotFoundError


@dataclass(frozen=True)
class FieldDescriptor:
    """A single declared field of a resource type."""

    name: str  # canonical public name
    attribute: str  # Python attribute the value is read from
    getter: Callable[[Any], Any]

    def read(self, instance: Any) -> Any:
        return self.getter(instance)


class FieldSet:
    """Ordered, case-insensitively addressable set of declared fields.

    Args:
        resource_type: The type the fields belong to.
        descriptors: Field descriptors in declaration order.
    """

    def __init__(self, resource_type: type, descriptors: list[FieldDescriptor]) -> None:
        self.resource_type = resource_type
        self._descriptors = tuple(descriptors)
        self._by_name: dict[str, FieldDescriptor] = {}
        for descriptor in self._descriptors:
            # Public names win over attribute names on collision
            self._by_name.setdefault(descriptor.attribute.lower(), descriptor)
            self._by_name[descriptor.name.lower()] = descriptor

    def get(self, name: str) -> FieldDescriptor | None:
        """Look up a field case-insensitively, returning None when absent."""
        return self._by_name.get(name.strip().lower())

    def resolve(self, name: str) -> FieldDescriptor:
        """Look up a field case-insensitively.

        Raises:
            FieldNotFoundError: If the type declares no such field.
        """
        descriptor = self.get(name)
        if descriptor is None:
            raise FieldNotFoundError(name.strip(), self.resource_type)
        return descriptor

    @property
    def names(self) -> list[str]:
        """Canonical field names in declaration order."""
        return [descriptor.name for descriptor in self._descriptors]

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None


def _pydantic_descriptors(model: type[BaseModel]) -> list[FieldDescriptor]:
    descriptors = []
    for attribute, info in model.model_fields.items():
        public_name = info.serialization_alias or info.alias or attribute
        descriptors.append(FieldDescriptor(public_name, attribute, attrgetter(attribute)))
    for attribute, computed in model.model_computed_fields.items():
        public_name = getattr(computed, "alias", None) or attribute
        descriptors.append(FieldDescriptor(public_name, attribute, attrgetter(attribute)))
    return descriptors


def _dataclass_descriptors(cls: type) -> list[FieldDescriptor]:
    return [
        FieldDescriptor(field.name, field.name, attrgetter(field.name))
        for field in dataclasses.fields(cls)
    ]


@functools.cache
def describe_fields(resource_type: type) -> FieldSet:
    """Build (and cache) the field set of a resource type.

    Detection order:
    1. Pydantic BaseModel -> model_fields, then computed fields
    2. dataclass -> dataclasses.fields()

    Raises:
        TypeError: If the type does not describe its fields.
    """
    if isinstance(resource_type, type) and issubclass(resource_type, BaseModel):
        return FieldSet(resource_type, _pydantic_descriptors(resource_type))
    if isinstance(resource_type, type) and dataclasses.is_dataclass(resource_type):
        return FieldSet(resource_type, _dataclass_descriptors(resource_type))
    raise TypeError(
        f"Cannot describe fields of {resource_type!r}: "
        "expected a pydantic model or a dataclass"
    )


def split_fields(fields: str | None) -> list[str]:
    """Split a comma-separated fields expression into trimmed tokens.

    An empty, whitespace-only or missing expression yields no tokens.
    """
    if fields is None or not fields.strip():
        return []
    return [token.strip() for token in fields.split(",")]
