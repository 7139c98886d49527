from __future__ import annotations

from .builder import TypedEntityBuilder
from .disk_store import DiskDatastore
from .entity import Entity, EntityBuilder
from .errors import BuilderConsumedError, DuplicatePropertyError, SchemaCompletenessError, TypestoreError
from .factory import create_datastore
from .interfaces import DatastoreClient
from .memory_store import InMemoryDatastore
from .property import Property, PropertyType
from .repositories import AsyncDatastoreRepository, AsyncTypedEntityRepository, TypedEntityRepository
from .table import TypedTable
from .timeconv import from_timestamp, to_timestamp
from .typed_entity import TypedEntity
from .values import Blob, Key, LatLng, Timestamp

__all__ = [
    "AsyncDatastoreRepository",
    "AsyncTypedEntityRepository",
    "Blob",
    "BuilderConsumedError",
    "DatastoreClient",
    "DiskDatastore",
    "DuplicatePropertyError",
    "Entity",
    "EntityBuilder",
    "InMemoryDatastore",
    "Key",
    "LatLng",
    "Property",
    "PropertyType",
    "SchemaCompletenessError",
    "Timestamp",
    "TypedEntity",
    "TypedEntityBuilder",
    "TypedEntityRepository",
    "TypedTable",
    "TypestoreError",
    "create_datastore",
    "from_timestamp",
    "to_timestamp",
]
