"""Exception hierarchy for data shaping and property mapping.

Configuration problems (a missing or duplicated type-pair mapping) are
programming errors that surface at start-up. Invalid client input (unknown
fields or sort keys) raises the InvalidFieldsError / InvalidOrderByError
branch so the boundary layer can turn it into a client error.
"""

from __future__ import annotations


class ShapingError(Exception):
    """Base exception for all data shaping and property mapping errors."""


# --- Configuration ---


class PropertyMappingError(ShapingError):
    """Raised for property mapping configuration errors."""


class DuplicatePropertyMappingError(PropertyMappingError):
    """Raised when a mapping for a type pair is registered twice."""

    def __init__(self, public_type: type, storage_type: type) -> None:
        self.public_type = public_type
        self.storage_type = storage_type
        super().__init__(
            f"A property mapping for <{public_type.__name__}, {storage_type.__name__}> "
            "is already registered"
        )


class PropertyMappingNotFoundError(PropertyMappingError):
    """Raised when exactly one mapping cannot be found for a type pair."""

    def __init__(self, public_type: type, storage_type: type, matches: int = 0) -> None:
        self.public_type = public_type
        self.storage_type = storage_type
        self.matches = matches
        super().__init__(
            f"Cannot find exact property mapping instance for "
            f"<{public_type.__name__}, {storage_type.__name__}> ({matches} found)"
        )


# --- Client input ---


class InvalidFieldsError(ShapingError):
    """Raised when a fields expression names fields a resource does not have."""


class FieldNotFoundError(InvalidFieldsError):
    """Raised when a single requested field is not declared on a resource type."""

    def __init__(self, field_name: str, resource_type: type) -> None:
        self.field_name = field_name
        self.resource_type = resource_type
        super().__init__(f"Property {field_name!r} was not found on {resource_type.__name__}")


class InvalidOrderByError(ShapingError):
    """Raised when an order-by expression cannot be applied."""

    def __init__(self, order_by: str, field_names: list[str] | None = None) -> None:
        self.order_by = order_by
        self.field_names = field_names or []
        if self.field_names:
            detail = f"unknown sort field(s) {self.field_names}"
        else:
            detail = "malformed clause"
        super().__init__(f"Invalid order-by expression {order_by!r}: {detail}")
