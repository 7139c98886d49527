from __future__ import annotations

from typing import Any, Protocol

from .entity import Entity
from .values import Key


class KeyValueDocumentStore(Protocol):
    """
    Minimal file-level interface: a single JSON-like document persisted under a key.
    """

    def load(self) -> dict[str, Any]:
        """Load and return the full document (never None)."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document atomically."""
        ...


class DatastoreClient(Protocol):
    """
    The document store surface typed tables are persisted through.
    """

    def allocate_key(self, kind: str, namespace: str = "") -> Key:
        """Reserve a fresh numeric key for `kind`."""
        ...

    def get(self, key: Key) -> Entity | None:
        ...

    def put(self, entity: Entity) -> Entity:
        """Insert or replace the entity stored under entity.key."""
        ...

    def delete(self, key: Key) -> bool:
        """Remove the entity; return whether it existed."""
        ...

    def list_kind(self, kind: str, namespace: str = "") -> list[Entity]:
        ...
