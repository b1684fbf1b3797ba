from __future__ import annotations
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TagRead(BaseModel):
    id: UUID
    tenant_id: UUID
    name: str
    comparison_key: str
    taggings_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class TagResolveRequest(BaseModel):
    # Lengths are checked by the resolver so the error shape matches other callers.
    names: List[str] = Field(default_factory=list, max_length=500)
