# tagvocab/domain/entities/tag.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from tagvocab.domain.errors import DuplicateKey


@dataclass(frozen=True)
class Tag:
    """
    A canonical label owned by one tenant.

    Two Tag values are equal when they belong to the same tenant and share a
    comparison key. The store-assigned id, the display name and the usage
    counter do not take part, so rows fetched separately (or one fetched and
    one freshly created) still compare equal.
    """
    tenant_id: UUID
    comparison_key: str
    name: str = field(compare=False)
    id: Optional[UUID] = field(default=None, compare=False)
    taggings_count: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class InsertResult:
    """
    Outcome of TagStore.insert_if_absent: either the created tag, or a
    conflict because the unique constraint already holds a matching row.
    """
    name: str
    tag: Optional[Tag] = None

    @classmethod
    def created(cls, tag: Tag) -> "InsertResult":
        return cls(name=tag.name, tag=tag)

    @classmethod
    def conflicted(cls, name: str) -> "InsertResult":
        return cls(name=name)

    @property
    def conflict(self) -> bool:
        return self.tag is None

    def unwrap(self, tenant_id: Optional[UUID] = None) -> Tag:
        if self.tag is None:
            raise DuplicateKey(self.name, tenant_id)
        return self.tag
