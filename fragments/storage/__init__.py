"""Storage backends for fragment metadata and payloads."""

from typing import Optional

from common.constants import BACKEND_MEMORY, BACKEND_SQLITE
from common.logging_config import get_logger
from fragments import config
from fragments.storage.backend import MetadataStore, PayloadStore, StorageBackend
from fragments.storage.disk_payload import DiskPayloadStore
from fragments.storage.memory import MemoryMetadataStore, MemoryPayloadStore
from fragments.storage.sqlite_metadata import SqliteMetadataStore

logger = get_logger(__name__)


def create_memory_backend() -> StorageBackend:
    return StorageBackend(MemoryMetadataStore(), MemoryPayloadStore())


def create_sqlite_backend(database_path: str, payload_path: str) -> StorageBackend:
    return StorageBackend(SqliteMetadataStore(database_path), DiskPayloadStore(payload_path))


def create_backend(kind: Optional[str] = None) -> StorageBackend:
    """
    Build the configured storage backend.

    Args:
        kind: Backend name ("memory" or "sqlite"). Defaults to FRAGMENTS_BACKEND

    Returns:
        A new StorageBackend

    Raises:
        ValueError: If the backend name is unknown
    """
    kind = (kind or config.STORAGE_BACKEND).lower()

    if kind == BACKEND_MEMORY:
        logger.info("Using in-memory fragment storage")
        return create_memory_backend()

    if kind == BACKEND_SQLITE:
        logger.info(
            f"Using SQLite fragment storage [database={config.DATABASE_PATH}] [payloads={config.PAYLOAD_PATH}]"
        )
        return create_sqlite_backend(config.DATABASE_PATH, config.PAYLOAD_PATH)

    raise ValueError(f"Unknown storage backend: {kind}")


__all__ = [
    "MetadataStore",
    "PayloadStore",
    "StorageBackend",
    "MemoryMetadataStore",
    "MemoryPayloadStore",
    "SqliteMetadataStore",
    "DiskPayloadStore",
    "create_backend",
    "create_memory_backend",
    "create_sqlite_backend",
]
