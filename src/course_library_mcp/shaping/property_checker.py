"""Check that a data shaping request only names existing fields."""

from __future__ import annotations

from .fields import describe_fields, split_fields


def has_properties(resource_type: type, fields: str | None) -> bool:
    """Return True if every field in ``fields`` is declared on ``resource_type``.

    An empty or missing expression means "all fields" and is always valid.
    Matching is case-insensitive; tokens are trimmed.
    """
    tokens = split_fields(fields)
    if not tokens:
        return True

    field_set = describe_fields(resource_type)
    return all(field_set.get(token) is not None for token in tokens)
