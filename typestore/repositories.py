from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, Protocol, TypeVar

from .builder import TypedEntityBuilder
from .interfaces import DatastoreClient
from .table import TypedTable
from .typed_entity import TypedEntity
from .values import Key

logger = logging.getLogger(__name__)

Tbl = TypeVar("Tbl", bound=TypedTable)
E = TypeVar("E", bound=TypedEntity)

Fill = Callable[[TypedEntityBuilder], None]


class TypedEntityRepository(Generic[Tbl, E]):
    """
    Creates, edits, reads and deletes typed entities of one table through a datastore.
    """

    def __init__(self, table: Tbl, entity_cls: type[E], datastore: DatastoreClient, *, namespace: str = ""):
        if entity_cls.table is not table:
            raise ValueError(f"{entity_cls.__name__} is not bound to table {table.kind!r}")
        self._table = table
        self._entity_cls = entity_cls
        self._datastore = datastore
        self._namespace = namespace

    @property
    def table(self) -> Tbl:
        return self._table

    def new_builder(self) -> TypedEntityBuilder[Tbl]:
        key = self._datastore.allocate_key(self._table.kind, self._namespace)
        return TypedEntityBuilder.for_new_key(self._table, key)

    def edit_builder(self, entity: E) -> TypedEntityBuilder[Tbl]:
        return TypedEntityBuilder.for_existing(self._table, entity)

    def save(self, builder: TypedEntityBuilder[Tbl]) -> E:
        raw = builder.build_entity()
        self._datastore.put(raw)
        return self._entity_cls(raw)

    def insert(self, fill: Fill) -> E:
        """Build a new entity with `fill` on a freshly allocated key and persist it."""
        builder = self.new_builder()
        fill(builder)
        entity = self.save(builder)
        logger.debug("INSERT %s", entity.key)
        return entity

    def update(self, entity: E, fill: Fill) -> E:
        """Overwrite the fields `fill` sets on a copy of `entity` and persist it."""
        builder = self.edit_builder(entity)
        fill(builder)
        updated = self.save(builder)
        logger.debug("UPDATE %s", updated.key)
        return updated

    def get(self, key: Key) -> E | None:
        raw = self._datastore.get(key)
        return self._entity_cls(raw) if raw is not None else None

    def delete(self, key: Key) -> bool:
        return self._datastore.delete(key)

    def list_all(self) -> list[E]:
        return [self._entity_cls(raw) for raw in self._datastore.list_kind(self._table.kind, self._namespace)]


class AsyncTypedEntityRepository(Protocol[E]):
    async def insert(self, fill: Fill) -> E: ...
    async def update(self, entity: E, fill: Fill) -> E: ...

    async def get(self, key: Key) -> E | None: ...
    async def delete(self, key: Key) -> bool: ...
    async def list_all(self) -> list[E]: ...


class AsyncDatastoreRepository(AsyncTypedEntityRepository[E]):
    """
    Async wrapper around TypedEntityRepository.
    Uses asyncio.to_thread to avoid blocking the event loop on datastore I/O.

    `fill` callbacks run in the worker thread together with the build.
    """

    def __init__(self, repo: TypedEntityRepository[Tbl, E]) -> None:
        self._repo = repo

    async def insert(self, fill: Fill) -> E:
        return await asyncio.to_thread(self._repo.insert, fill)

    async def update(self, entity: E, fill: Fill) -> E:
        return await asyncio.to_thread(self._repo.update, entity, fill)

    async def get(self, key: Key) -> E | None:
        return await asyncio.to_thread(self._repo.get, key)

    async def delete(self, key: Key) -> bool:
        return await asyncio.to_thread(self._repo.delete, key)

    async def list_all(self) -> list[E]:
        return await asyncio.to_thread(self._repo.list_all)
