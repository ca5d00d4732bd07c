"""Property mapping: translate public sort fields into storage columns.

A ``PropertyMapping`` belongs to one (public type, storage type) pair, e.g.
``AuthorDto -> Author``. Each public field maps to one or more storage
attributes; ``name`` fans out to ``first_name, last_name`` and ``age`` maps to
``date_of_birth`` with ``revert`` set, because a greater age means an earlier
birth date.

Order-by syntax:
    "name desc, age"  ->  [OrderByClause("name", True), OrderByClause("age", False)]
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import (
    DuplicatePropertyMappingError,
    InvalidOrderByError,
    PropertyMappingError,
    PropertyMappingNotFoundError,
)

logger = logging.getLogger(__name__)

TPublic = TypeVar("TPublic")
TStorage = TypeVar("TStorage")

_DIRECTIONS = {"asc": False, "desc": True}


class PropertyMappingValue(BaseModel):
    """How one public field maps to storage."""

    model_config = ConfigDict(frozen=True)

    destination_properties: tuple[str, ...]
    revert: bool = False

    @field_validator("destination_properties")
    @classmethod
    def validate_destination_properties(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Require at least one non-blank storage attribute."""
        if not v:
            raise ValueError("destination_properties must not be empty")
        if any(not name.strip() for name in v):
            raise ValueError("destination_properties must not contain blank names")
        return v


@dataclass(frozen=True)
class OrderByClause:
    """One parsed ``<field> [asc|desc]`` clause."""

    field_name: str
    descending: bool = False


def _parse_clause(clause: str) -> OrderByClause | None:
    tokens = clause.split()
    if len(tokens) == 1:
        return OrderByClause(tokens[0])
    if len(tokens) == 2 and tokens[1].lower() in _DIRECTIONS:
        return OrderByClause(tokens[0], _DIRECTIONS[tokens[1].lower()])
    return None


def parse_order_by(order_by: str | None) -> list[OrderByClause]:
    """Parse an order-by expression into clauses.

    Empty, whitespace-only or missing expressions yield no clauses.

    Raises:
        InvalidOrderByError: If a clause is empty or has an unknown direction.
    """
    if order_by is None or not order_by.strip():
        return []

    clauses = []
    for raw_clause in order_by.split(","):
        clause = _parse_clause(raw_clause)
        if clause is None:
            raise InvalidOrderByError(order_by)
        clauses.append(clause)
    return clauses


class PropertyMapping(Generic[TPublic, TStorage]):
    """Immutable, case-insensitive map of public field -> PropertyMappingValue.

    Args:
        public_type: The resource type clients see (e.g. AuthorDto).
        storage_type: The persisted type queries run against (e.g. Author).
        mappings: Public field name -> PropertyMappingValue.

    Raises:
        PropertyMappingError: If two keys collide case-insensitively.
    """

    def __init__(
        self,
        public_type: type[TPublic],
        storage_type: type[TStorage],
        mappings: Mapping[str, PropertyMappingValue],
    ) -> None:
        self.public_type = public_type
        self.storage_type = storage_type

        entries: dict[str, tuple[str, PropertyMappingValue]] = {}
        for name, value in mappings.items():
            key = name.lower()
            if key in entries:
                raise PropertyMappingError(
                    f"Duplicate mapping key {name!r} (clashes with {entries[key][0]!r}) "
                    f"for <{public_type.__name__}, {storage_type.__name__}>"
                )
            entries[key] = (name, value)
        self._entries = MappingProxyType(entries)

    def applies_to(self, public_type: type, storage_type: type) -> bool:
        """Whether this mapping serves the given type pair."""
        return self.public_type is public_type and self.storage_type is storage_type

    def get(self, field_name: str) -> PropertyMappingValue | None:
        entry = self._entries.get(field_name.strip().lower())
        return entry[1] if entry else None

    def __getitem__(self, field_name: str) -> PropertyMappingValue:
        value = self.get(field_name)
        if value is None:
            raise KeyError(field_name)
        return value

    def __contains__(self, field_name: object) -> bool:
        return isinstance(field_name, str) and self.get(field_name) is not None

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"PropertyMapping<{self.public_type.__name__}, {self.storage_type.__name__}>"
            f"({list(self)})"
        )


class PropertyMappingRegistry:
    """Holds one PropertyMapping per (public type, storage type) pair.

    Populate once at start-up with ``register``, then ``freeze``; afterwards
    the registry is read-only and safe to share between concurrent requests.
    """

    def __init__(self) -> None:
        self._mappings: list[PropertyMapping] = []
        self._frozen = False

    def register(
        self,
        public_type: type,
        storage_type: type,
        mapping: PropertyMapping | Mapping[str, PropertyMappingValue],
    ) -> PropertyMapping:
        """Add the mapping for a type pair.

        Raises:
            DuplicatePropertyMappingError: If the pair already has a mapping.
            PropertyMappingError: If the registry is frozen, or a given
                PropertyMapping belongs to another type pair.
        """
        if self._frozen:
            raise PropertyMappingError("Property mapping registry is frozen")

        if not isinstance(mapping, PropertyMapping):
            mapping = PropertyMapping(public_type, storage_type, mapping)
        elif not mapping.applies_to(public_type, storage_type):
            raise PropertyMappingError(
                f"{mapping!r} cannot be registered for "
                f"<{public_type.__name__}, {storage_type.__name__}>"
            )

        if any(m.applies_to(public_type, storage_type) for m in self._mappings):
            raise DuplicatePropertyMappingError(public_type, storage_type)

        self._mappings.append(mapping)
        logger.debug("Registered property mapping %r", mapping)
        return mapping

    def freeze(self) -> PropertyMappingRegistry:
        """End registration. Returns self for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get_mapping(self, public_type: type, storage_type: type) -> PropertyMapping:
        """Return the single mapping registered for a type pair.

        Raises:
            PropertyMappingNotFoundError: If zero or several mappings match.
        """
        matches = [m for m in self._mappings if m.applies_to(public_type, storage_type)]
        if len(matches) == 1:
            return matches[0]
        raise PropertyMappingNotFoundError(public_type, storage_type, len(matches))

    def is_valid_order_by(
        self, public_type: type, storage_type: type, order_by: str | None
    ) -> bool:
        """Whether every clause of ``order_by`` names a mapped public field.

        An empty expression means "no explicit order" and is valid. The
        ``revert`` flag plays no part in validity.

        Raises:
            PropertyMappingNotFoundError: If the type pair has no mapping.
        """
        if order_by is None or not order_by.strip():
            return True

        mapping = self.get_mapping(public_type, storage_type)
        for raw_clause in order_by.split(","):
            clause = _parse_clause(raw_clause)
            if clause is None or clause.field_name not in mapping:
                return False
        return True

    def __len__(self) -> int:
        return len(self._mappings)
