"""Service layer for fragment operations."""

from fragments.services.fragment_service import FragmentService

__all__ = [
    "FragmentService",
]
