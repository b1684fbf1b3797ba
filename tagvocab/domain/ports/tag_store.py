from __future__ import annotations
from typing import Iterable, List, Optional, Protocol
from uuid import UUID

from tagvocab.domain.entities.tag import InsertResult, Tag
from tagvocab.domain.enums.usage_order import UsageOrder


class TagStorePort(Protocol):
    """
    Persistence the resolver depends on. Every call is scoped to one tenant;
    name matching follows the store's NameNormalizer.
    """

    def find_exact(self, tenant_id: UUID, name: str) -> Optional[Tag]: ...

    # One round trip for the whole batch.
    def find_any_of(self, tenant_id: UUID, names: Iterable[str]) -> List[Tag]: ...

    def find_like(self, tenant_id: UUID, substring: str) -> List[Tag]: ...

    def find_like_any(self, tenant_id: UUID, substrings: Iterable[str]) -> List[Tag]: ...

    def find_by_context(self, tenant_id: UUID, context: str) -> List[Tag]: ...

    def insert_if_absent(self, tenant_id: UUID, name: str) -> InsertResult: ...

    def order_by_usage(self, tenant_id: UUID, direction: UsageOrder, limit: int) -> List[Tag]: ...
