"""Payload files on disk: one file per fragment under a per-owner directory."""

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Optional

from common.constants import PAYLOAD_FILE_SUFFIX
from common.logging_config import get_logger
from fragments.exceptions import StorageError
from fragments.storage.backend import PayloadStore

logger = get_logger(__name__)


def _digest(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class DiskPayloadStore(PayloadStore):
    """
    Stores each payload at ``<root>/<sha256(owner_id)>/<sha256(id)>.frag``.

    Owner and fragment ids are opaque strings, so both are hashed before
    they touch the filesystem. Writes go to a temporary file in the same
    directory and are moved into place with ``os.replace``.
    """

    def __init__(self, root: str):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def get_payload_path(self, owner_id: str, fragment_id: str) -> Path:
        """
        Get file path for a fragment payload.

        Args:
            owner_id: Owning principal
            fragment_id: Fragment id

        Returns:
            Path object for the payload file
        """
        return self.root / _digest(owner_id) / f"{_digest(fragment_id)}{PAYLOAD_FILE_SUFFIX}"

    def put(self, owner_id: str, fragment_id: str, data: bytes) -> None:
        path = self.get_payload_path(owner_id, fragment_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, path)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to write payload [id={fragment_id}]: {e}", exc_info=True)
            raise StorageError(f"Failed to write payload for fragment {fragment_id}") from e

    def get(self, owner_id: str, fragment_id: str) -> Optional[bytes]:
        path = self.get_payload_path(owner_id, fragment_id)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read payload for fragment {fragment_id}") from e

    def remove(self, owner_id: str, fragment_id: str) -> bool:
        path = self.get_payload_path(owner_id, fragment_id)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete payload for fragment {fragment_id}") from e
