from __future__ import annotations

import enum
from datetime import datetime

import pytest

from typestore import (
    Blob,
    BuilderConsumedError,
    Key,
    LatLng,
    SchemaCompletenessError,
    TypedEntityBuilder,
    TypedTable,
    to_timestamp,
)
from typestore.values import NullValue, StringValue

from conftest import Category, Place, User


K1 = Key(kind="User", id=1)


def _fresh(users, key: Key = K1) -> TypedEntityBuilder:
    return TypedEntityBuilder.for_new_key(users, key)


def _ann(users) -> TypedEntityBuilder:
    b = _fresh(users)
    b.set(users.id, K1)
    b.set(users.name, "Ann")
    b.set(users.bio, "Grew up by the sea. " * 50)
    b.set(users.age, 30)
    return b


def test_fresh_builder_with_every_property_builds(users):
    entity = _ann(users).build_entity()

    assert entity.key == K1
    assert set(entity.properties) == {"id", "name", "bio", "age"}
    assert entity.get_value("id") == K1
    assert entity.get_value("name") == "Ann"
    assert entity.get_value("age") == 30
    assert entity["bio"].exclude_from_indexes is True


def test_missing_property_fails_and_names_it(users):
    b = _fresh(users)
    b.set(users.id, K1).set(users.name, "Ann").set(users.bio, "...")

    with pytest.raises(SchemaCompletenessError) as excinfo:
        b.build_entity()

    assert excinfo.value.missing == ("age",)
    assert excinfo.value.kind == "User"
    assert "age" in str(excinfo.value)


def test_untouched_fresh_builder_reports_all_properties(users):
    with pytest.raises(SchemaCompletenessError) as excinfo:
        _fresh(users).build_entity()
    assert excinfo.value.missing == ("age", "bio", "id", "name")


def test_completeness_is_order_independent(users):
    b = _fresh(users)
    b[users.age] = 30
    b[users.bio] = None
    b[users.name] = "Ann"
    b[users.id] = K1
    assert b.build_entity().get_value("age") == 30


def test_reassignment_counts_once(users):
    b = _fresh(users)
    b.set(users.name, "Ann")
    b.set(users.name, "Anne")
    b.set(users.name, None)
    b.set(users.name, "Ann")

    assert users.name not in b.unused_properties
    assert b.unused_properties == {users.id, users.bio, users.age}

    with pytest.raises(SchemaCompletenessError) as excinfo:
        b.build_entity()
    assert excinfo.value.missing == ("age", "bio", "id")


def test_last_assignment_wins(users):
    b = _ann(users)
    b.set(users.age, 31)
    b.set(users.name, None)
    entity = b.build_entity()
    assert entity.get_value("age") == 31
    assert entity.is_null("name")


def test_explicit_null_is_stored_and_satisfies_completeness(users):
    b = _fresh(users)
    for prop in (users.id, users.name, users.bio, users.age):
        b.set(prop, None)

    entity = b.build_entity()

    for name in ("id", "name", "bio", "age"):
        assert name in entity
        assert isinstance(entity[name], NullValue)
        assert entity.get_value(name) is None


def test_null_skips_long_string_flag(users):
    b = _ann(users)
    b.set(users.bio, None)
    assert b.build_entity()["bio"].exclude_from_indexes is False


def test_long_string_is_unindexed_and_string_is_not(users):
    entity = _ann(users).build_entity()
    assert isinstance(entity["bio"], StringValue)
    assert entity["bio"].exclude_from_indexes is True
    assert isinstance(entity["name"], StringValue)
    assert entity["name"].exclude_from_indexes is False


def test_enum_stores_symbolic_name(places):
    b = TypedEntityBuilder.for_existing(places, _full_place(places))
    b.set(places.category, Category.MUSEUM)
    assert b.build_entity().get_value("category") == "MUSEUM"


def test_enum_value_survives_reordering():
    class ColorV1(enum.Enum):
        RED = 1
        GREEN = 2

    class ColorV2(enum.Enum):
        GREEN = 1
        BLUE = 2
        RED = 3

    stored = []
    for color_cls in (ColorV1, ColorV2):
        table = TypedTable("Paint")
        color = table.enum_property("color", color_cls)
        b = TypedEntityBuilder.for_new_key(table, Key(kind="Paint", id=1))
        b.set(color, color_cls.RED)
        stored.append(b.build_entity().get_value("color"))

    assert stored == ["RED", "RED"]


def test_every_property_type_is_coerced(places):
    opened = datetime(2024, 5, 17, 9, 30, 15, 250_000)
    owner = Key(kind="User", name="ann")
    photo = Blob(data=b"\x89PNG\r\n")
    where = LatLng(latitude=48.8584, longitude=2.2945)

    b = TypedEntityBuilder.for_new_key(places, Key(kind="Place", id=7))
    (
        b.set(places.owner, owner)
        .set(places.visits, 12)
        .set(places.rating, 4.5)
        .set(places.open, True)
        .set(places.title, "Cafe")
        .set(places.description, "A long description")
        .set(places.category, Category.CAFE)
        .set(places.photo, photo)
        .set(places.opened_at, opened)
        .set(places.location, where)
    )
    entity = b.build_entity()

    assert {name: v.type for name, v in entity.properties.items()} == {
        "owner": "key",
        "visits": "long",
        "rating": "double",
        "open": "boolean",
        "title": "string",
        "description": "string",
        "category": "string",
        "photo": "blob",
        "opened_at": "timestamp",
        "location": "lat_lng",
    }
    assert entity.get_value("owner") == owner
    assert entity.get_value("photo") == photo
    assert entity.get_value("location") == where
    assert entity.get_value("opened_at") == to_timestamp(opened)
    assert entity["description"].exclude_from_indexes is True
    assert entity["title"].exclude_from_indexes is False


def test_edit_mode_without_assignments_keeps_everything(users):
    original = User(_ann(users).build_entity())

    rebuilt = TypedEntityBuilder.for_existing(users, original).build_entity()

    assert rebuilt == original.entity


def test_edit_mode_overwrites_only_assigned_fields(users):
    original = User(_ann(users).build_entity())

    b = TypedEntityBuilder.for_existing(users, original)
    assert b.unused_properties == frozenset()
    b.set(users.age, 31)
    edited = b.build_entity()

    assert edited.key == original.key
    assert edited.get_value("age") == 31
    for name in ("id", "name", "bio"):
        assert edited[name] == original.entity[name]
    # The source entity is untouched.
    assert original.entity.get_value("age") == 30


def test_builder_is_consumed_after_success(users):
    b = _ann(users)
    b.build_entity()
    assert b.consumed

    with pytest.raises(BuilderConsumedError):
        b.build_entity()
    with pytest.raises(BuilderConsumedError):
        b.set(users.age, 1)


def test_builder_cannot_be_retried_after_failure(users):
    b = _fresh(users)
    with pytest.raises(SchemaCompletenessError):
        b.build_entity()

    with pytest.raises(BuilderConsumedError):
        b.set(users.age, 30)
    with pytest.raises(BuilderConsumedError):
        b.build_entity()


def test_property_of_another_table_is_rejected(users, places):
    b = _fresh(users)
    with pytest.raises(ValueError):
        b.set(places.title, "Cafe")
    assert places.title not in b.unused_properties
    assert len(b.unused_properties) == 4


def test_key_kind_must_match_table(users):
    with pytest.raises(ValueError):
        TypedEntityBuilder.for_new_key(users, Key(kind="Place", id=1))


def test_existing_entity_kind_must_match_table(users, places):
    with pytest.raises(ValueError):
        TypedEntityBuilder.for_existing(users, _full_place(places))


def test_wrong_value_type_is_rejected_by_coercion(users):
    from pydantic import ValidationError

    b = _fresh(users)
    b.set(users.id, K1).set(users.name, "Ann").set(users.bio, "...")
    with pytest.raises(ValidationError):
        b.set(users.age, "thirty")

    assert users.age in b.unused_properties
    with pytest.raises(SchemaCompletenessError) as excinfo:
        b.build_entity()
    assert excinfo.value.missing == ("age",)


def test_failed_coercion_leaves_property_unset(places):
    from datetime import timezone

    b = TypedEntityBuilder.for_new_key(places, Key(kind="Place", id=3))
    with pytest.raises(ValueError):
        b.set(places.opened_at, datetime(2024, 1, 1, tzinfo=timezone.utc))
    with pytest.raises(AttributeError):
        b.set(places.category, "CAFE")

    assert places.opened_at in b.unused_properties
    assert places.category in b.unused_properties

    b.set(places.category, None)
    assert places.category not in b.unused_properties


def _full_place(places):
    b = TypedEntityBuilder.for_new_key(places, Key(kind="Place", id=99))
    for prop in places.registered_properties:
        b.set(prop, None)
    return Place(b.build_entity())
