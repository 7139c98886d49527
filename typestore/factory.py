from __future__ import annotations

import logging

from dotenv import load_dotenv

from .disk_store import DiskDatastore
from .interfaces import DatastoreClient
from .memory_store import InMemoryDatastore
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_datastore(settings: Settings | None = None, *, env_file: str = "local.env") -> DatastoreClient:
    """
    Build the configured datastore. Loads `env_file` (if present) before reading settings.
    """
    if settings is None:
        load_dotenv(env_file)
        settings = get_settings()

    if settings.persist_to_disk:
        logger.info("DATASTORE: disk at %s", settings.data_dir)
        return DiskDatastore(settings.data_dir, log_writes=settings.debug_log_writes)

    # Default off: nothing outlives the process unless explicitly enabled.
    logger.info("DATASTORE: in-memory")
    return InMemoryDatastore(log_writes=settings.debug_log_writes)
