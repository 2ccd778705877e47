"""Process-start wiring: logging, storage backend and fragment service."""

from typing import Optional

from common.logging_config import setup_logging
from fragments.services.fragment_service import FragmentService
from fragments.storage import create_backend


def create_service(backend_kind: Optional[str] = None, log_level: Optional[str] = None) -> FragmentService:
    """
    Configure logging and build a FragmentService over a new backend.

    Args:
        backend_kind: "memory" or "sqlite". Defaults to FRAGMENTS_BACKEND
        log_level: Log level. Defaults to LOG_LEVEL env var or INFO

    Returns:
        FragmentService owning a freshly created StorageBackend
    """
    logger = setup_logging('fragments', log_level)
    logger.info("Fragments engine starting up...")

    service = FragmentService(create_backend(backend_kind))
    logger.info("Fragment storage initialized")
    return service
