from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

from .settings import get_settings
from .values import Timestamp

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@lru_cache(maxsize=None)
def zone_for(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def _resolve(tz: tzinfo | str | None) -> tzinfo:
    if tz is None:
        return zone_for(get_settings().timezone)
    if isinstance(tz, str):
        return zone_for(tz)
    return tz


def to_timestamp(dt: datetime, tz: tzinfo | str | None = None) -> Timestamp:
    """
    Convert a naive local datetime to a store Timestamp.

    The naive value is read as wall-clock time in `tz` (the configured zone by default).
    """
    if dt.tzinfo is not None and dt.utcoffset() is not None:
        raise ValueError("expected a naive local datetime, got an aware one")
    delta = dt.replace(tzinfo=_resolve(tz)) - _EPOCH
    seconds = delta.days * 86_400 + delta.seconds
    return Timestamp(seconds=seconds, nanos=delta.microseconds * 1_000)


def from_timestamp(ts: Timestamp, tz: tzinfo | str | None = None) -> datetime:
    # Sub-microsecond nanos are truncated.
    instant = _EPOCH + timedelta(seconds=ts.seconds, microseconds=ts.nanos // 1_000)
    return instant.astimezone(_resolve(tz)).replace(tzinfo=None)
