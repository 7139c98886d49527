from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from . import paths


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Persistence (default: in-memory)
    persist_to_disk: bool
    data_dir: Path

    # Zone used to interpret naive datetimes
    timezone: str

    # Debug
    debug_log_writes: bool


def get_settings() -> Settings:
    persist_to_disk = _env_bool("TYPESTORE_PERSIST_TO_DISK", False)

    raw_dir = os.getenv("TYPESTORE_DATA_DIR", "").strip()
    data_dir = Path(raw_dir).expanduser() if raw_dir else paths.project_root() / "data"

    timezone = os.getenv("TYPESTORE_TIMEZONE", "UTC").strip() or "UTC"

    debug_log_writes = _env_bool("TYPESTORE_DEBUG_LOG_WRITES", False)

    return Settings(
        persist_to_disk=persist_to_disk,
        data_dir=data_dir,
        timezone=timezone,
        debug_log_writes=debug_log_writes,
    )
