from __future__ import annotations

import base64
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_serializer, field_validator, model_validator


class Key(BaseModel):
    """
    Identity of one document: a kind plus either a numeric id or a string name.
    """

    model_config = ConfigDict(frozen=True)

    kind: str = Field(min_length=1)
    id: int | None = Field(default=None, gt=0)
    name: str | None = Field(default=None, min_length=1)
    namespace: str = ""

    @model_validator(mode="after")
    def _exactly_one_identifier(self) -> "Key":
        if (self.id is None) == (self.name is None):
            raise ValueError("a key needs exactly one of id or name")
        return self

    @property
    def path(self) -> str:
        ident = str(self.id) if self.id is not None else f"name={self.name}"
        base = f"{self.kind}:{ident}"
        return f"{self.namespace}/{base}" if self.namespace else base

    def __str__(self) -> str:
        return self.path


class LatLng(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class Blob(BaseModel):
    # Serialized as base64 so entities survive a JSON round trip.
    model_config = ConfigDict(frozen=True)

    data: bytes

    @field_validator("data", mode="before")
    @classmethod
    def _decode_base64(cls, v: Any) -> Any:
        if isinstance(v, str):
            return base64.b64decode(v.encode("ascii"), validate=True)
        return v

    @field_serializer("data", when_used="json")
    def _encode_base64(self, v: bytes) -> str:
        return base64.b64encode(v).decode("ascii")

    def __len__(self) -> int:
        return len(self.data)


class Timestamp(BaseModel):
    """A UTC instant: whole seconds since the epoch plus nanoseconds."""

    model_config = ConfigDict(frozen=True)

    seconds: int
    nanos: int = Field(default=0, ge=0, le=999_999_999)


class _FieldValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    exclude_from_indexes: bool = False


class NullValue(_FieldValue):
    type: Literal["null"] = "null"
    value: None = None


class KeyValue(_FieldValue):
    type: Literal["key"] = "key"
    value: Key


class LongValue(_FieldValue):
    type: Literal["long"] = "long"
    value: StrictInt


class DoubleValue(_FieldValue):
    type: Literal["double"] = "double"
    value: float


class BooleanValue(_FieldValue):
    type: Literal["boolean"] = "boolean"
    value: StrictBool


class StringValue(_FieldValue):
    type: Literal["string"] = "string"
    value: StrictStr


class BlobValue(_FieldValue):
    type: Literal["blob"] = "blob"
    value: Blob


class TimestampValue(_FieldValue):
    type: Literal["timestamp"] = "timestamp"
    value: Timestamp


class LatLngValue(_FieldValue):
    type: Literal["lat_lng"] = "lat_lng"
    value: LatLng


Value = Annotated[
    Union[
        NullValue,
        KeyValue,
        LongValue,
        DoubleValue,
        BooleanValue,
        StringValue,
        BlobValue,
        TimestampValue,
        LatLngValue,
    ],
    Field(discriminator="type"),
]
