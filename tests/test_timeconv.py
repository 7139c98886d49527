from __future__ import annotations

from datetime import datetime, timezone

import pytest

from typestore import Timestamp, from_timestamp, to_timestamp


def test_utc_conversion():
    ts = to_timestamp(datetime(1970, 1, 2, 0, 0, 1, 500), "UTC")
    assert ts == Timestamp(seconds=86_401, nanos=500_000)


def test_pre_epoch_values_normalize_nanos():
    ts = to_timestamp(datetime(1969, 12, 31, 23, 59, 59, 250_000), "UTC")
    assert ts == Timestamp(seconds=-1, nanos=250_000_000)
    assert from_timestamp(ts, "UTC") == datetime(1969, 12, 31, 23, 59, 59, 250_000)


def test_named_zone_is_applied():
    ts = to_timestamp(datetime(2024, 1, 15, 12, 0), "America/New_York")
    # EST is UTC-5 in January.
    assert ts == to_timestamp(datetime(2024, 1, 15, 17, 0), "UTC")
    assert from_timestamp(ts, "America/New_York") == datetime(2024, 1, 15, 12, 0)


def test_roundtrip_keeps_microseconds():
    dt = datetime(2031, 7, 4, 23, 59, 58, 999_999)
    assert from_timestamp(to_timestamp(dt)) == dt


def test_default_zone_comes_from_settings(monkeypatch):
    monkeypatch.setenv("TYPESTORE_TIMEZONE", "Asia/Tokyo")
    dt = datetime(2024, 3, 1, 9, 0)
    assert to_timestamp(dt) == to_timestamp(datetime(2024, 3, 1, 0, 0), "UTC")


def test_aware_datetime_is_rejected():
    with pytest.raises(ValueError):
        to_timestamp(datetime(2024, 1, 1, tzinfo=timezone.utc))
