from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

from pydantic import BaseModel, Field

from .entity import Entity
from .interfaces import DatastoreClient, KeyValueDocumentStore
from .json_store import atomic_write_json, read_json
from .locks import GLOBAL_PATH_LOCKS
from .paths import ensure_dir, kind_file
from .values import Key

logger = logging.getLogger(__name__)

R = TypeVar("R")


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Always returns a dict (empty dict on missing/invalid JSON).
    - Writes atomically.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        with GLOBAL_PATH_LOCKS.hold(self._path):
            raw = read_json(self._path)
            return raw if isinstance(raw, dict) else {}

    def save(self, doc: dict[str, Any]) -> None:
        with GLOBAL_PATH_LOCKS.hold(self._path):
            atomic_write_json(self._path, doc)

    def update(self, fn: Callable[[dict[str, Any]], R]) -> R:
        """Load, let `fn` mutate the document in place, then save, all under the path lock."""
        with GLOBAL_PATH_LOCKS.hold(self._path):
            doc = self.load()
            result = fn(doc)
            self.save(doc)
            return result


class KindDoc(BaseModel):
    """
    Mirrors the on-disk <kind>.json schema:
      { "next_id": 1, "entities": { "<key path>": { "key": {...}, "properties": {...} } } }
    """

    next_id: int = 1
    entities: dict[str, Entity] = Field(default_factory=dict)

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "KindDoc":
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class DiskDatastore(DatastoreClient):
    """
    Disk-backed datastore: one JSON document per (namespace, kind) under `data_dir`.

    Every operation reloads the kind document, so several instances may share a directory.
    """

    def __init__(self, data_dir: Path, *, log_writes: bool = False):
        self._data_dir = ensure_dir(data_dir)
        self._log_writes = log_writes

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _store(self, kind: str, namespace: str) -> DiskJsonDocumentStore:
        return DiskJsonDocumentStore(kind_file(self._data_dir, kind, namespace))

    def _mutate(self, kind: str, namespace: str, fn: Callable[[KindDoc], R]) -> R:
        def apply(raw: dict[str, Any]) -> R:
            doc = KindDoc.from_disk_doc(raw)
            result = fn(doc)
            raw.clear()
            raw.update(doc.to_disk_doc())
            return result

        return self._store(kind, namespace).update(apply)

    def allocate_key(self, kind: str, namespace: str = "") -> Key:
        def take(doc: KindDoc) -> int:
            new_id = doc.next_id
            doc.next_id += 1
            return new_id

        return Key(kind=kind, id=self._mutate(kind, namespace, take), namespace=namespace)

    def get(self, key: Key) -> Entity | None:
        doc = KindDoc.from_disk_doc(self._store(key.kind, key.namespace).load())
        return doc.entities.get(key.path)

    def put(self, entity: Entity) -> Entity:
        key = entity.key

        def write(doc: KindDoc) -> None:
            doc.entities[key.path] = entity
            if key.id is not None and key.id >= doc.next_id:
                doc.next_id = key.id + 1

        self._mutate(key.kind, key.namespace, write)
        if self._log_writes:
            logger.info("DISK PUT %s (%d properties)", key, len(entity.properties))
        return entity

    def delete(self, key: Key) -> bool:
        existed = self._mutate(key.kind, key.namespace, lambda doc: doc.entities.pop(key.path, None) is not None)
        if self._log_writes:
            logger.info("DISK DELETE %s existed=%s", key, existed)
        return existed

    def list_kind(self, kind: str, namespace: str = "") -> list[Entity]:
        doc = KindDoc.from_disk_doc(self._store(kind, namespace).load())
        return list(doc.entities.values())
