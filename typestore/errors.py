from __future__ import annotations

from typing import Iterable


class TypestoreError(Exception):
    """Base class for errors raised by typestore."""


class SchemaCompletenessError(TypestoreError, RuntimeError):
    """
    Raised when a fresh entity is built while some declared properties were never set.
    """

    def __init__(self, kind: str, missing: Iterable[str]):
        self.kind = kind
        self.missing = tuple(sorted(missing))
        super().__init__(
            f"{kind}: some properties have not been declared: {', '.join(self.missing)}"
        )


class BuilderConsumedError(TypestoreError, RuntimeError):
    """Raised when a builder is used again after build_entity()."""


class DuplicatePropertyError(TypestoreError, ValueError):
    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind}: property {name!r} is already registered")
