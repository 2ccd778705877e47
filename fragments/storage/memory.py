"""In-memory metadata and payload stores keyed by (owner_id, id)."""

import threading
from typing import Dict, List, Optional, Tuple

from fragments.storage.backend import MetadataStore, PayloadStore
from fragments.types import FragmentRecord

Key = Tuple[str, str]


class MemoryMetadataStore(MetadataStore):
    """
    Dict-backed metadata store.

    The owner index is derived by scanning keys; dict insertion order gives
    the listing order.
    """

    def __init__(self):
        self._records: Dict[Key, FragmentRecord] = {}
        self._lock = threading.Lock()

    def put(self, owner_id: str, fragment_id: str, record: FragmentRecord) -> None:
        with self._lock:
            self._records[(owner_id, fragment_id)] = record

    def get(self, owner_id: str, fragment_id: str) -> Optional[FragmentRecord]:
        with self._lock:
            return self._records.get((owner_id, fragment_id))

    def list_ids(self, owner_id: str) -> List[str]:
        with self._lock:
            return [fragment_id for owner, fragment_id in self._records if owner == owner_id]

    def remove(self, owner_id: str, fragment_id: str) -> bool:
        with self._lock:
            return self._records.pop((owner_id, fragment_id), None) is not None


class MemoryPayloadStore(PayloadStore):
    """Dict-backed payload store."""

    def __init__(self):
        self._payloads: Dict[Key, bytes] = {}
        self._lock = threading.Lock()

    def put(self, owner_id: str, fragment_id: str, data: bytes) -> None:
        with self._lock:
            self._payloads[(owner_id, fragment_id)] = bytes(data)

    def get(self, owner_id: str, fragment_id: str) -> Optional[bytes]:
        with self._lock:
            return self._payloads.get((owner_id, fragment_id))

    def remove(self, owner_id: str, fragment_id: str) -> bool:
        with self._lock:
            return self._payloads.pop((owner_id, fragment_id), None) is not None
