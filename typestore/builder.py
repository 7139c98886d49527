from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, TypeVar

from .entity import Entity, EntityBuilder
from .errors import BuilderConsumedError, SchemaCompletenessError
from .property import Property, PropertyType
from .table import TypedTable
from .timeconv import to_timestamp
from .values import Key

if TYPE_CHECKING:
    from .typed_entity import TypedEntity

logger = logging.getLogger(__name__)

Tbl = TypeVar("Tbl", bound=TypedTable)
T = TypeVar("T")

_Setter = Callable[[EntityBuilder, str, Any], Any]


def _set_long_string(b: EntityBuilder, name: str, value: str) -> None:
    # Large text is kept out of indexes.
    b.set_string(name, value, exclude_from_indexes=True)


def _set_enum(b: EntityBuilder, name: str, value: Enum) -> None:
    # Store the symbolic name so reordering enumerators keeps stored meaning.
    b.set_string(name, value.name)


_SETTERS: dict[PropertyType, _Setter] = {
    PropertyType.KEY: EntityBuilder.set_key,
    PropertyType.LONG: EntityBuilder.set_long,
    PropertyType.DOUBLE: EntityBuilder.set_double,
    PropertyType.BOOL: EntityBuilder.set_bool,
    PropertyType.STRING: EntityBuilder.set_string,
    PropertyType.LONG_STRING: _set_long_string,
    PropertyType.ENUM: _set_enum,
    PropertyType.BLOB: EntityBuilder.set_blob,
    PropertyType.DATE_TIME: lambda b, name, value: b.set_timestamp(name, to_timestamp(value)),
    PropertyType.LAT_LNG: EntityBuilder.set_lat_lng,
}

_unhandled = set(PropertyType) - set(_SETTERS)
if _unhandled:
    raise RuntimeError(f"no setter for property types: {sorted(t.name for t in _unhandled)}")


class TypedEntityBuilder(Generic[Tbl]):
    """
    Builds one entity of `table`, checking that every declared property gets set.

    Use `for_new_key` for a fresh entity (every registered property must be set,
    `None` counts) or `for_existing` to edit one (nothing is required). A builder is
    single-use: `build_entity()` consumes it whether or not it succeeds.

    Not thread-safe; do not share one builder across concurrent callers.
    """

    def __init__(self, table: Tbl, partial: EntityBuilder, unused: Iterable[Property]):
        self._table = table
        self._partial = partial
        self._unused: set[Property] = set(unused)
        self._consumed = False

    @classmethod
    def for_new_key(cls, table: Tbl, key: Key) -> "TypedEntityBuilder[Tbl]":
        if key.kind != table.kind:
            raise ValueError(f"key kind {key.kind!r} does not match table {table.kind!r}")
        return cls(table, Entity.new_builder(key), table.registered_properties)

    @classmethod
    def for_existing(cls, table: Tbl, existing: "TypedEntity[Tbl]") -> "TypedEntityBuilder[Tbl]":
        if existing.key.kind != table.kind:
            raise ValueError(f"entity kind {existing.key.kind!r} does not match table {table.kind!r}")
        return cls(table, Entity.new_builder_from(existing.entity), ())

    @property
    def table(self) -> Tbl:
        return self._table

    @property
    def key(self) -> Key:
        return self._partial.key

    @property
    def unused_properties(self) -> frozenset[Property]:
        return frozenset(self._unused)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def set(self, prop: Property[T], value: T) -> "TypedEntityBuilder[Tbl]":
        """Set `prop` to `value`; `None` stores an explicit null."""
        self._check_open()
        if not self._table.owns(prop):
            raise ValueError(f"{prop} is not a property of table {self._table.kind!r}")
        if value is None:
            self._partial.set_null(prop.name)
        else:
            # Only a value that was actually stored counts toward completeness.
            _SETTERS[prop.type](self._partial, prop.name, value)
        self._unused.discard(prop)
        return self

    def __setitem__(self, prop: Property[T], value: T) -> None:
        self.set(prop, value)

    def build_entity(self) -> Entity:
        """
        Build the raw Entity.

        Raises SchemaCompletenessError if some property was never set.
        """
        self._check_open()
        self._consumed = True
        if self._unused:
            missing = [p.name for p in self._unused]
            logger.warning("BUILD %s: missing properties %s", self._table.kind, sorted(missing))
            raise SchemaCompletenessError(self._table.kind, missing)
        entity = self._partial.build()
        logger.debug("BUILD %s: %d properties", entity.key, len(entity.properties))
        return entity

    def _check_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(f"builder for {self._partial.key} has already been built")
