"""Data shaping: project resources down to client-selected fields.

``shape_data`` turns a resource (or a homogeneous sequence of resources) into
plain ordered dicts holding only the requested fields. The dicts keep
insertion order, so a ``links`` entry added by the caller serializes last.

Example:
    >>> shape_data(author_dto, "id, name")
    {'id': UUID('...'), 'name': 'Berry Griffin Beak Eldritch'}
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

from pydantic import BaseModel

from .fields import FieldDescriptor, describe_fields, split_fields

ShapedResource: TypeAlias = dict[str, Any]


def _is_resource(source: Any) -> bool:
    # Pydantic models iterate over (name, value) pairs; treat them as single resources
    if isinstance(source, (BaseModel, str, bytes, Mapping)):
        return True
    return dataclasses.is_dataclass(source) and not isinstance(source, type)


def _select_fields(resource_type: type, fields: str | None) -> list[FieldDescriptor]:
    field_set = describe_fields(resource_type)
    tokens = split_fields(fields)
    if not tokens:
        return list(field_set)
    # Resolve every token before reading anything: the whole call fails on a miss
    return [field_set.resolve(token) for token in tokens]


def _project(instance: Any, selected: list[FieldDescriptor]) -> ShapedResource:
    shaped: ShapedResource = {}
    for descriptor in selected:
        shaped[descriptor.name] = descriptor.read(instance)
    return shaped


def shape_one(source: Any, fields: str | None = None) -> ShapedResource:
    """Shape a single resource instance."""
    if source is None:
        raise ValueError("source must not be None")
    return _project(source, _select_fields(type(source), fields))


def shape_many(
    source: Iterable[Any],
    fields: str | None = None,
    *,
    resource_type: type | None = None,
) -> list[ShapedResource]:
    """Shape every instance of a homogeneous sequence, preserving order.

    Fields are resolved once against ``resource_type`` (or the type of the
    first element when not given).

    Raises:
        ValueError: If ``source`` is None or holds an instance of another type.
        FieldNotFoundError: If a requested field is not declared on the type.
    """
    if source is None:
        raise ValueError("source must not be None")

    items = list(source)
    if resource_type is None:
        if not items:
            return []
        resource_type = type(items[0])

    selected = _select_fields(resource_type, fields)

    shaped_items = []
    for item in items:
        if not isinstance(item, resource_type):
            raise ValueError(
                f"Cannot shape {type(item).__name__} as part of a "
                f"{resource_type.__name__} sequence"
            )
        shaped_items.append(_project(item, selected))
    return shaped_items


def shape_data(
    source: Any,
    fields: str | None = None,
    *,
    resource_type: type | None = None,
) -> ShapedResource | list[ShapedResource]:
    """Shape a resource or a sequence of resources.

    Args:
        source: A resource instance, or a list/tuple/iterable of instances.
        fields: Comma-separated field names; empty or None selects all fields
            in declaration order.
        resource_type: Element type for sequences; required to validate
            ``fields`` against an empty sequence.

    Returns:
        One shaped dict for an instance, a list of shaped dicts for a sequence.

    Raises:
        ValueError: If ``source`` is None.
        FieldNotFoundError: If a requested field does not exist.
    """
    if source is None:
        raise ValueError("source must not be None")
    if _is_resource(source) or not isinstance(source, Iterable):
        return shape_one(source, fields)
    return shape_many(source, fields, resource_type=resource_type)
