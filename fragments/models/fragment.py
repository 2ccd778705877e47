"""Fragment entity: metadata, validation rules and persistence operations."""

from typing import List, Optional, Union

from common.logging_config import get_logger
from fragments import conversion_matrix
from fragments.exceptions import NotFoundError, StorageError, ValidationError
from fragments.schemas.fragments import FragmentResponse
from fragments.storage.backend import StorageBackend
from fragments.types import FragmentRecord
from fragments.utils import generate_uuid, get_current_timestamp

logger = get_logger(__name__)


class Fragment:
    """
    One stored blob's metadata, scoped to an owner.

    ``id``, ``owner_id``, ``type`` and ``created`` are fixed at construction.
    ``size`` always mirrors the length of the payload last written through
    ``set_data``.
    """

    def __init__(
        self,
        backend: StorageBackend,
        owner_id: Optional[str] = None,
        type: Optional[str] = None,
        id: Optional[str] = None,
        created: Optional[str] = None,
        updated: Optional[str] = None,
        size: int = 0,
    ):
        if not owner_id or not type:
            raise ValidationError("owner_id and/or type missing")
        if not isinstance(owner_id, str) or not isinstance(type, str):
            raise ValidationError(f"owner_id and type must be strings (got {owner_id!r}, {type!r})")
        if not isinstance(size, int) or isinstance(size, bool):
            raise ValidationError(f"Fragment size must be a number (got {size!r})")
        if size < 0:
            raise ValidationError(f"Fragment size must be a non-negative number (got {size})")
        if not conversion_matrix.is_supported_type(type):
            raise ValidationError(f"Fragment type not supported: {type}")

        now = get_current_timestamp()

        self._backend = backend
        self._id = id or generate_uuid()
        self._owner_id = owner_id
        self._type = type
        self._created = created or now
        self.updated = updated or now
        self.size = size

    @property
    def id(self) -> str:
        return self._id

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def type(self) -> str:
        return self._type

    @property
    def created(self) -> str:
        return self._created

    @property
    def mime_type(self) -> str:
        """
        The fragment's type without parameters:
        "text/html; charset=utf-8" -> "text/html"
        """
        return conversion_matrix.base_type(self._type)

    @property
    def is_text(self) -> bool:
        return self.mime_type.startswith("text/")

    @property
    def formats(self) -> List[str]:
        """Media types this fragment can be served as, its own type first."""
        return conversion_matrix.formats_for(self.mime_type)

    @property
    def valid_extensions(self) -> List[str]:
        return conversion_matrix.valid_extensions_for(self.mime_type)

    @staticmethod
    def is_supported_type(value: str) -> bool:
        """
        Check whether a Content-Type value is one we know how to store.

        Args:
            value: A Content-Type value (e.g., "text/plain" or "text/plain; charset=utf-8")

        Returns:
            True if the base media type is supported
        """
        return conversion_matrix.is_supported_type(value)

    @classmethod
    def from_record(cls, backend: StorageBackend, record: FragmentRecord) -> "Fragment":
        return cls(
            backend,
            owner_id=record.owner_id,
            type=record.type,
            id=record.id,
            created=record.created,
            updated=record.updated,
            size=record.size,
        )

    @classmethod
    def by_user(
        cls, backend: StorageBackend, owner_id: str, expand: bool = False
    ) -> Union[List[str], List["Fragment"]]:
        """
        Get all fragments (ids or full) for the given owner.

        Args:
            backend: Storage backend
            owner_id: Owning principal
            expand: Whether to expand ids to full fragments

        Returns:
            Ordered ids, or Fragment objects when expand is set. Empty for unknown owners.
        """
        results = backend.list_fragments(owner_id, expand)
        if expand:
            return [cls.from_record(backend, record) for record in results]
        return results

    @classmethod
    def by_id(cls, backend: StorageBackend, owner_id: str, fragment_id: str) -> "Fragment":
        """
        Load a fragment's metadata. The payload is not read.

        Raises:
            NotFoundError: If the owner has no fragment with this id
        """
        record = backend.read_fragment(owner_id, fragment_id)
        if record is None:
            raise NotFoundError(f"Fragment {fragment_id} not found")
        return cls.from_record(backend, record)

    @staticmethod
    def delete(backend: StorageBackend, owner_id: str, fragment_id: str) -> None:
        """
        Delete the owner's fragment metadata and payload.

        Raises:
            NotFoundError: If the owner has no fragment with this id
        """
        if not backend.delete_fragment(owner_id, fragment_id):
            raise NotFoundError(f"Fragment {fragment_id} not found")
        logger.info(f"Fragment deleted [id={fragment_id}]")

    def save(self) -> None:
        """
        Refresh ``updated`` and persist the metadata.

        Raises:
            StorageError: If the backend write fails
        """
        self.updated = get_current_timestamp()
        self._backend.write_fragment(self.to_record())

    def get_data(self) -> bytes:
        """
        Read the fragment's payload.

        Raises:
            NotFoundError: If no payload is stored
        """
        data = self._backend.read_fragment_data(self._owner_id, self._id)
        if data is None:
            raise NotFoundError(f"Fragment {self._id} has no data")
        return data

    def set_data(self, data: bytes) -> None:
        """
        Replace the fragment's payload.

        ``size`` and ``updated`` are persisted before the payload. If the
        payload write fails the stored size no longer matches the stored
        bytes; the failure is logged and raised, not rolled back.

        Args:
            data: New payload

        Raises:
            ValidationError: If data is not bytes
            StorageError: If either write fails
        """
        if not isinstance(data, (bytes, bytearray)):
            raise ValidationError(f"data is not a byte buffer (got {type(data).__name__})")

        data = bytes(data)
        self.size = len(data)
        self.save()

        try:
            self._backend.write_fragment_data(self._owner_id, self._id, data)
        except StorageError:
            logger.error(
                f"Payload write failed after metadata update, size may not match stored data "
                f"[id={self._id}] [size={self.size}]"
            )
            raise

    def to_record(self) -> FragmentRecord:
        return FragmentRecord(
            id=self._id,
            owner_id=self._owner_id,
            type=self._type,
            created=self._created,
            updated=self.updated,
            size=self.size,
        )

    def to_response(self) -> FragmentResponse:
        return FragmentResponse(
            id=self._id,
            owner_id=self._owner_id,
            created=self._created,
            updated=self.updated,
            type=self._type,
            size=self.size,
            formats=self.formats,
        )

    def __repr__(self) -> str:
        return f"Fragment(id={self._id!r}, type={self._type!r}, size={self.size})"
