from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class PropertyType(Enum):
    KEY = "key"
    LONG = "long"
    DOUBLE = "double"
    BOOL = "bool"
    STRING = "string"
    LONG_STRING = "long_string"
    ENUM = "enum"
    BLOB = "blob"
    DATE_TIME = "date_time"
    LAT_LNG = "lat_lng"


@dataclass(frozen=True)
class Property(Generic[T]):
    """
    A named, typed field of one table.

    Equal (and hash-equal) by owning table kind, name and type. Tables create each
    descriptor once; callers hold on to that instance instead of building new ones.
    """

    table_kind: str
    name: str
    type: PropertyType
    enum_cls: type[Enum] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("property name must be non-empty")
        if (self.type is PropertyType.ENUM) != (self.enum_cls is not None):
            raise ValueError(f"{self.name}: enum_cls is required for ENUM properties and only for them")

    def __str__(self) -> str:
        return f"{self.table_kind}.{self.name}"
