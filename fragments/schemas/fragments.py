"""Pydantic schemas for fragment metadata handed to the response layer."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class FragmentResponse(BaseModel):
    """Serialized fragment metadata."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    owner_id: str = Field(alias="ownerId")
    created: str
    updated: str
    type: str
    size: int
    formats: List[str]


class FragmentListResponse(BaseModel):
    """Fragment ids owned by a user."""
    fragments: List[str]


class ExpandedFragmentListResponse(BaseModel):
    """Full fragment metadata owned by a user."""
    fragments: List[FragmentResponse]
