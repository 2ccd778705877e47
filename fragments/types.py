"""Fragment-specific data type definitions."""

from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class FragmentRecord:
    """
    Persisted metadata for a single fragment.
    """
    id: str
    owner_id: str
    type: str
    created: str
    updated: str
    size: int


class Representation(NamedTuple):
    """Converted payload bytes and the media type they are served as."""
    data: bytes
    mime_type: str
