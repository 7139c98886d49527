from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .values import (
    Blob,
    BlobValue,
    BooleanValue,
    DoubleValue,
    Key,
    KeyValue,
    LatLng,
    LatLngValue,
    LongValue,
    NullValue,
    StringValue,
    Timestamp,
    TimestampValue,
    Value,
)


class Entity(BaseModel):
    """
    One schemaless document: a key plus named field values.

    A name missing from `properties` is an absent field; a `NullValue` is an explicit null.
    """

    model_config = ConfigDict(frozen=True)

    key: Key
    properties: dict[str, Value] = Field(default_factory=dict)

    @classmethod
    def new_builder(cls, key: Key) -> "EntityBuilder":
        return EntityBuilder(key)

    @classmethod
    def new_builder_from(cls, entity: "Entity") -> "EntityBuilder":
        return EntityBuilder(entity.key, entity.properties)

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "Entity":
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def __contains__(self, name: object) -> bool:
        return name in self.properties

    def __getitem__(self, name: str) -> Value:
        return self.properties[name]

    def is_null(self, name: str) -> bool:
        return isinstance(self.properties.get(name), NullValue)

    def get_value(self, name: str) -> Any:
        """Raw native value of a field (None for an explicit null). KeyError if absent."""
        return self.properties[name].value


class EntityBuilder:
    """Mutable accumulator for an Entity. Setters return the builder."""

    def __init__(self, key: Key, properties: Mapping[str, Value] | None = None):
        self._key = key
        self._properties: dict[str, Value] = dict(properties or {})

    @property
    def key(self) -> Key:
        return self._key

    def set_value(self, name: str, value: Value) -> "EntityBuilder":
        self._properties[name] = value
        return self

    def set_null(self, name: str) -> "EntityBuilder":
        return self.set_value(name, NullValue())

    def set_key(self, name: str, value: Key) -> "EntityBuilder":
        return self.set_value(name, KeyValue(value=value))

    def set_long(self, name: str, value: int) -> "EntityBuilder":
        return self.set_value(name, LongValue(value=value))

    def set_double(self, name: str, value: float) -> "EntityBuilder":
        return self.set_value(name, DoubleValue(value=value))

    def set_bool(self, name: str, value: bool) -> "EntityBuilder":
        return self.set_value(name, BooleanValue(value=value))

    def set_string(self, name: str, value: str, *, exclude_from_indexes: bool = False) -> "EntityBuilder":
        return self.set_value(name, StringValue(value=value, exclude_from_indexes=exclude_from_indexes))

    def set_blob(self, name: str, value: Blob) -> "EntityBuilder":
        return self.set_value(name, BlobValue(value=value))

    def set_timestamp(self, name: str, value: Timestamp) -> "EntityBuilder":
        return self.set_value(name, TimestampValue(value=value))

    def set_lat_lng(self, name: str, value: LatLng) -> "EntityBuilder":
        return self.set_value(name, LatLngValue(value=value))

    def build(self) -> Entity:
        return Entity(key=self._key, properties=dict(self._properties))
