from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TypeVar

from .errors import DuplicatePropertyError
from .property import Property, PropertyType
from .values import Blob, Key, LatLng

E = TypeVar("E", bound=Enum)


class TypedTable:
    """
    A schema for one kind of entity.

    Declare properties once, typically in the subclass constructor, and keep the
    returned descriptors as attributes:

        class UserTable(TypedTable):
            def __init__(self) -> None:
                super().__init__("User")
                self.name = self.string_property("name")
                self.age = self.long_property("age")
    """

    def __init__(self, kind: str):
        if not kind:
            raise ValueError("table kind must be non-empty")
        self._kind = kind
        self._properties: dict[str, Property] = {}

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def registered_properties(self) -> frozenset[Property]:
        return frozenset(self._properties.values())

    def property_named(self, name: str) -> Property:
        return self._properties[name]

    def owns(self, prop: Property) -> bool:
        return self._properties.get(prop.name) == prop

    def _register(self, name: str, type_: PropertyType, enum_cls: type[Enum] | None = None) -> Property:
        if name in self._properties:
            raise DuplicatePropertyError(self._kind, name)
        prop: Property = Property(table_kind=self._kind, name=name, type=type_, enum_cls=enum_cls)
        self._properties[name] = prop
        return prop

    def key_property(self, name: str) -> Property[Key | None]:
        return self._register(name, PropertyType.KEY)

    def long_property(self, name: str) -> Property[int | None]:
        return self._register(name, PropertyType.LONG)

    def double_property(self, name: str) -> Property[float | None]:
        return self._register(name, PropertyType.DOUBLE)

    def bool_property(self, name: str) -> Property[bool | None]:
        return self._register(name, PropertyType.BOOL)

    def string_property(self, name: str) -> Property[str | None]:
        return self._register(name, PropertyType.STRING)

    def long_string_property(self, name: str) -> Property[str | None]:
        return self._register(name, PropertyType.LONG_STRING)

    def enum_property(self, name: str, enum_cls: type[E]) -> Property[E | None]:
        return self._register(name, PropertyType.ENUM, enum_cls)

    def blob_property(self, name: str) -> Property[Blob | None]:
        return self._register(name, PropertyType.BLOB)

    def date_time_property(self, name: str) -> Property[datetime | None]:
        return self._register(name, PropertyType.DATE_TIME)

    def lat_lng_property(self, name: str) -> Property[LatLng | None]:
        return self._register(name, PropertyType.LAT_LNG)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind!r}, properties={sorted(self._properties)})"
