"""Data shaping and property mapping.

- fields: introspectable field descriptors for resource types
- property_mapping: public field -> storage column mappings and the registry
- property_checker: validate data shaping field lists
- data_shaper: project resources to ordered field dicts
- sorting: apply order-by expressions to SQLAlchemy queries
"""

from __future__ import annotations

from .data_shaper import ShapedResource, shape_data, shape_many, shape_one
from .exceptions import (
    DuplicatePropertyMappingError,
    FieldNotFoundError,
    InvalidFieldsError,
    InvalidOrderByError,
    PropertyMappingError,
    PropertyMappingNotFoundError,
    ShapingError,
)
from .fields import FieldDescriptor, FieldSet, describe_fields, split_fields
from .property_checker import has_properties
from .property_mapping import (
    OrderByClause,
    PropertyMapping,
    PropertyMappingRegistry,
    PropertyMappingValue,
    parse_order_by,
)
from .sorting import apply_sort

__all__ = [
    # Shaping
    "ShapedResource",
    "shape_data",
    "shape_one",
    "shape_many",
    # Fields
    "FieldDescriptor",
    "FieldSet",
    "describe_fields",
    "split_fields",
    "has_properties",
    # Property mapping
    "OrderByClause",
    "PropertyMapping",
    "PropertyMappingRegistry",
    "PropertyMappingValue",
    "parse_order_by",
    "apply_sort",
    # Exceptions
    "ShapingError",
    "PropertyMappingError",
    "DuplicatePropertyMappingError",
    "PropertyMappingNotFoundError",
    "InvalidFieldsError",
    "FieldNotFoundError",
    "InvalidOrderByError",
]
