from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from .entity import Entity
from .property import Property, PropertyType
from .table import TypedTable
from .timeconv import from_timestamp
from .values import Key, NullValue

Tbl = TypeVar("Tbl", bound=TypedTable)
T = TypeVar("T")


class TypedEntity(Generic[Tbl]):
    """
    Read-only typed view over a raw Entity of one table.

    Subclasses set `table` and usually expose Python properties:

        class User(TypedEntity[UserTable]):
            table = USERS

            @property
            def name(self) -> str:
                return self[USERS.name]
    """

    table: ClassVar[Any]

    def __init__(self, entity: Entity):
        table = getattr(type(self), "table", None)
        if not isinstance(table, TypedTable):
            raise TypeError(f"{type(self).__name__}.table must be a TypedTable")
        if entity.key.kind != table.kind:
            raise ValueError(f"entity kind {entity.key.kind!r} does not match table {table.kind!r}")
        self._entity = entity

    @property
    def entity(self) -> Entity:
        return self._entity

    @property
    def key(self) -> Key:
        return self._entity.key

    def get(self, prop: Property[T]) -> T:
        raw = self._entity[prop.name]
        if isinstance(raw, NullValue):
            return None  # type: ignore[return-value]
        if prop.type is PropertyType.ENUM:
            return prop.enum_cls[raw.value]  # type: ignore[index, return-value]
        if prop.type is PropertyType.DATE_TIME:
            return from_timestamp(raw.value)  # type: ignore[return-value]
        return raw.value

    def __getitem__(self, prop: Property[T]) -> T:
        return self.get(prop)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedEntity):
            return NotImplemented
        return type(self) is type(other) and self._entity == other._entity

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key})"
