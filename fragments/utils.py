"""Utility helper functions for the fragments engine."""

import posixpath
import uuid
from datetime import datetime, timezone
from typing import Tuple


def generate_uuid() -> str:
    """
    Generate a new UUID4 string.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def get_current_timestamp() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        Current timestamp as ISO format string
    """
    return datetime.now(timezone.utc).isoformat()


def split_extension(id_with_extension: str) -> Tuple[str, str]:
    """
    Split a requested fragment reference into id and extension.

    Args:
        id_with_extension: Fragment id, optionally followed by an extension (e.g., "abc.html")

    Returns:
        Tuple of (id, extension); extension is "" when none was given
    """
    return posixpath.splitext(id_with_extension)
