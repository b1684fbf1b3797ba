# tests/domain/conftest.py
from __future__ import annotations

import threading
import uuid
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

import pytest

from tagvocab.common.naming.normalizer import NameNormalizer
from tagvocab.domain.entities.tag import InsertResult, Tag
from tagvocab.domain.enums.usage_order import UsageOrder


class InMemoryTagStore:
    """
    TagStorePort double. A lock around insert plays the part of the unique
    index; `calls` records every operation so tests can count round trips.
    `before_insert` runs outside the lock, letting tests line threads up.
    """

    def __init__(self, normalizer: NameNormalizer) -> None:
        self.normalizer = normalizer
        self.rows: Dict[Tuple[UUID, str], Tag] = {}
        self.calls: List[Tuple[str, object]] = []
        self.before_insert: Optional[Callable[[UUID, str], None]] = None
        self._lock = threading.Lock()

    def _tenant_rows(self, tenant_id: UUID) -> List[Tag]:
        with self._lock:
            return [t for (tid, _), t in self.rows.items() if tid == tenant_id]

    def find_exact(self, tenant_id, name):
        self.calls.append(("find_exact", name))
        with self._lock:
            return self.rows.get((tenant_id, self.normalizer.normalize(name)))

    def find_any_of(self, tenant_id, names: Iterable[str]):
        names = list(names)
        self.calls.append(("find_any_of", names))
        keys = set(self.normalizer.normalize_all(names))
        return [t for t in self._tenant_rows(tenant_id) if t.comparison_key in keys]

    def find_like(self, tenant_id, substring):
        return self.find_like_any(tenant_id, [substring])

    def find_like_any(self, tenant_id, substrings):
        needles = [self.normalizer.normalize(s) for s in substrings]
        return [t for t in self._tenant_rows(tenant_id) if any(n in t.comparison_key for n in needles)]

    def find_by_context(self, tenant_id, context):
        return []

    def insert_if_absent(self, tenant_id, name):
        self.calls.append(("insert_if_absent", name))
        if self.before_insert:
            self.before_insert(tenant_id, name)
        key = self.normalizer.normalize(name)
        with self._lock:
            if (tenant_id, key) in self.rows:
                return InsertResult.conflicted(name)
            tag = Tag(tenant_id=tenant_id, comparison_key=key, name=name, id=uuid.uuid4())
            self.rows[(tenant_id, key)] = tag
        return InsertResult.created(tag)

    def order_by_usage(self, tenant_id, direction, limit):
        rows = sorted(self._tenant_rows(tenant_id), key=lambda t: t.taggings_count,
                      reverse=UsageOrder(direction) is UsageOrder.desc)
        return rows[:limit]

    def count(self, op: str) -> int:
        return sum(1 for c, _ in self.calls if c == op)


@pytest.fixture()
def tenant_id() -> UUID:
    return uuid.uuid4()


@pytest.fixture()
def make_store() -> Callable[..., InMemoryTagStore]:
    def _make(strict: bool = False) -> InMemoryTagStore:
        return InMemoryTagStore(NameNormalizer.from_flag(strict))
    return _make
