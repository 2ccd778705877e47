"""Pydantic schemas for fragment data handed to callers."""

from fragments.schemas.common import ErrorResponse
from fragments.schemas.fragments import (
    ExpandedFragmentListResponse,
    FragmentListResponse,
    FragmentResponse,
)

__all__ = [
    "ErrorResponse",
    "ExpandedFragmentListResponse",
    "FragmentListResponse",
    "FragmentResponse",
]
