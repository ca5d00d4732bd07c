"""Apply a client order-by expression to an SQLAlchemy query."""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import Select, asc, desc
from sqlalchemy.orm import InstrumentedAttribute

from .exceptions import InvalidOrderByError, PropertyMappingError
from .property_mapping import PropertyMapping, parse_order_by

SelectT = TypeVar("SelectT", bound=Select[Any])


def _storage_column(model_class: type, attribute: str) -> InstrumentedAttribute:
    column = getattr(model_class, attribute, None)
    if not isinstance(column, InstrumentedAttribute):
        raise PropertyMappingError(
            f"{model_class.__name__} has no mapped column {attribute!r}"
        )
    return column


def apply_sort(
    query: SelectT,
    order_by: str | None,
    mapping: PropertyMapping,
    model_class: type | None = None,
) -> SelectT:
    """Append ORDER BY terms for ``order_by`` to ``query``.

    Each clause expands to every destination property of its mapping value,
    in order. A ``revert`` mapping flips the requested direction, so
    ``age`` ascending sorts ``date_of_birth`` descending.

    Args:
        query: The select statement to extend.
        order_by: Client expression, e.g. ``"name desc, age"``.
        mapping: Public -> storage mapping for the queried type pair.
        model_class: ORM class holding the storage columns; defaults to the
            mapping's storage type.

    Returns:
        The query with ORDER BY terms appended (unchanged for an empty
        expression).

    Raises:
        InvalidOrderByError: If a clause is malformed or names an unmapped field.
        PropertyMappingError: If a destination is not a column of the model.
    """
    clauses = parse_order_by(order_by)
    if not clauses:
        return query

    unknown = [clause.field_name for clause in clauses if clause.field_name not in mapping]
    if unknown:
        raise InvalidOrderByError(order_by or "", unknown)

    model_class = model_class or mapping.storage_type
    terms = []
    for clause in clauses:
        value = mapping[clause.field_name]
        descending = not clause.descending if value.revert else clause.descending
        for attribute in value.destination_properties:
            column = _storage_column(model_class, attribute)
            terms.append(desc(column) if descending else asc(column))

    return query.order_by(*terms)
