from __future__ import annotations

import enum
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import typestore` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from typestore import TypedEntity, TypedTable  # noqa: E402


class UserTable(TypedTable):
    def __init__(self) -> None:
        super().__init__("User")
        self.id = self.key_property("id")
        self.name = self.string_property("name")
        self.bio = self.long_string_property("bio")
        self.age = self.long_property("age")


USERS = UserTable()


class User(TypedEntity[UserTable]):
    table = USERS

    @property
    def name(self) -> str | None:
        return self[USERS.name]

    @property
    def age(self) -> int | None:
        return self[USERS.age]


class Category(enum.Enum):
    CAFE = 1
    PARK = 2
    MUSEUM = 3


class PlaceTable(TypedTable):
    """One property of every supported type."""

    def __init__(self) -> None:
        super().__init__("Place")
        self.owner = self.key_property("owner")
        self.visits = self.long_property("visits")
        self.rating = self.double_property("rating")
        self.open = self.bool_property("open")
        self.title = self.string_property("title")
        self.description = self.long_string_property("description")
        self.category = self.enum_property("category", Category)
        self.photo = self.blob_property("photo")
        self.opened_at = self.date_time_property("opened_at")
        self.location = self.lat_lng_property("location")


PLACES = PlaceTable()


class Place(TypedEntity[PlaceTable]):
    table = PLACES


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect persistence paths to a temp project directory so tests never touch real ./data.
    """
    import typestore.paths as paths

    monkeypatch.setattr(paths, "project_root", lambda: tmp_path)
    monkeypatch.setenv("TYPESTORE_DATA_DIR", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def users() -> UserTable:
    return USERS


@pytest.fixture
def places() -> PlaceTable:
    return PLACES
