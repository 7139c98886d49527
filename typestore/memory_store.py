from __future__ import annotations

import logging
import threading

from .entity import Entity
from .interfaces import DatastoreClient
from .values import Key

logger = logging.getLogger(__name__)


class InMemoryDatastore(DatastoreClient):
    """
    Process-local datastore. Contents are lost when the process exits.
    """

    def __init__(self, *, log_writes: bool = False) -> None:
        self._lock = threading.Lock()
        self._entities: dict[tuple[str, str], dict[str, Entity]] = {}
        self._next_ids: dict[tuple[str, str], int] = {}
        self._log_writes = log_writes

    def allocate_key(self, kind: str, namespace: str = "") -> Key:
        with self._lock:
            slot = (namespace, kind)
            new_id = self._next_ids.get(slot, 1)
            self._next_ids[slot] = new_id + 1
        return Key(kind=kind, id=new_id, namespace=namespace)

    def get(self, key: Key) -> Entity | None:
        with self._lock:
            return self._entities.get((key.namespace, key.kind), {}).get(key.path)

    def put(self, entity: Entity) -> Entity:
        key = entity.key
        slot = (key.namespace, key.kind)
        with self._lock:
            self._entities.setdefault(slot, {})[key.path] = entity
            if key.id is not None and key.id >= self._next_ids.get(slot, 1):
                self._next_ids[slot] = key.id + 1
        if self._log_writes:
            logger.info("MEM PUT %s (%d properties)", key, len(entity.properties))
        return entity

    def delete(self, key: Key) -> bool:
        with self._lock:
            existed = self._entities.get((key.namespace, key.kind), {}).pop(key.path, None) is not None
        if self._log_writes:
            logger.info("MEM DELETE %s existed=%s", key, existed)
        return existed

    def list_kind(self, kind: str, namespace: str = "") -> list[Entity]:
        with self._lock:
            return list(self._entities.get((namespace, kind), {}).values())
