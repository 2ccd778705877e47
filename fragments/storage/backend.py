"""Storage interfaces and the backend that pairs a metadata store with a payload store."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional, Union

from common.logging_config import get_logger
from fragments.exceptions import StorageError
from fragments.types import FragmentRecord

logger = get_logger(__name__)


class MetadataStore(ABC):
    """
    Fragment metadata keyed by (owner_id, id), plus the per-owner id index.

    Implementations must be safe for concurrent use by multiple callers.
    """

    @abstractmethod
    def put(self, owner_id: str, fragment_id: str, record: FragmentRecord) -> None:
        """Insert or replace the record; registers the id in the owner index."""

    @abstractmethod
    def get(self, owner_id: str, fragment_id: str) -> Optional[FragmentRecord]:
        """Return the record, or None when absent."""

    @abstractmethod
    def list_ids(self, owner_id: str) -> List[str]:
        """Ids owned by ``owner_id`` in insertion order; empty for unknown owners."""

    @abstractmethod
    def remove(self, owner_id: str, fragment_id: str) -> bool:
        """Remove the record and index entry. Returns False when it did not exist."""

    def close(self) -> None:
        pass


class PayloadStore(ABC):
    """
    Fragment payload bytes keyed by (owner_id, id).
    """

    @abstractmethod
    def put(self, owner_id: str, fragment_id: str, data: bytes) -> None:
        """Insert or replace the payload."""

    @abstractmethod
    def get(self, owner_id: str, fragment_id: str) -> Optional[bytes]:
        """Return the payload, or None when absent."""

    @abstractmethod
    def remove(self, owner_id: str, fragment_id: str) -> bool:
        """Remove the payload. Returns False when it did not exist."""

    def close(self) -> None:
        pass


@contextmanager
def _storage_errors(action: str, fragment_id: str) -> Iterator[None]:
    """Translate store failures into StorageError."""
    try:
        yield
    except StorageError:
        raise
    except Exception as e:
        logger.error(f"Failed to {action} [id={fragment_id}]: {e}", exc_info=True)
        raise StorageError(f"Failed to {action} for fragment {fragment_id}") from e


class StorageBackend:
    """
    Pairs a metadata store with a payload store behind one object.

    Entities receive a backend explicitly; nothing here is module-level state.
    Any failure raised by either store surfaces as StorageError.
    """

    def __init__(self, metadata: MetadataStore, payloads: PayloadStore):
        self.metadata = metadata
        self.payloads = payloads

    def write_fragment(self, record: FragmentRecord) -> None:
        logger.debug(f"Writing fragment metadata [id={record.id}] [size={record.size}]")
        with _storage_errors("write metadata", record.id):
            self.metadata.put(record.owner_id, record.id, record)

    def read_fragment(self, owner_id: str, fragment_id: str) -> Optional[FragmentRecord]:
        with _storage_errors("read metadata", fragment_id):
            return self.metadata.get(owner_id, fragment_id)

    def write_fragment_data(self, owner_id: str, fragment_id: str, data: bytes) -> None:
        logger.debug(f"Writing fragment data [id={fragment_id}] [bytes={len(data)}]")
        with _storage_errors("write data", fragment_id):
            self.payloads.put(owner_id, fragment_id, data)

    def read_fragment_data(self, owner_id: str, fragment_id: str) -> Optional[bytes]:
        with _storage_errors("read data", fragment_id):
            return self.payloads.get(owner_id, fragment_id)

    def list_fragments(
        self, owner_id: str, expand: bool = False
    ) -> Union[List[str], List[FragmentRecord]]:
        """
        List an owner's fragments.

        Args:
            owner_id: Owning principal
            expand: Return full records instead of ids

        Returns:
            Ordered ids, or ordered records when expand is set
        """
        with _storage_errors("list fragments", "*"):
            ids = self.metadata.list_ids(owner_id)
            if not expand:
                return ids

            records = []
            for fragment_id in ids:
                record = self.metadata.get(owner_id, fragment_id)
                # Deleted between listing and reading
                if record is not None:
                    records.append(record)
            return records

    def delete_fragment(self, owner_id: str, fragment_id: str) -> bool:
        """
        Delete metadata, index entry and payload together.

        Returns:
            True if metadata existed; the payload is removed either way
        """
        with _storage_errors("delete", fragment_id):
            existed = self.metadata.remove(owner_id, fragment_id)
            payload_existed = self.payloads.remove(owner_id, fragment_id)

        if existed and not payload_existed:
            logger.warning(f"Fragment had metadata but no payload [id={fragment_id}]")
        elif payload_existed and not existed:
            logger.warning(f"Removed orphaned payload without metadata [id={fragment_id}]")

        return existed

    def close(self) -> None:
        self.metadata.close()
        self.payloads.close()
