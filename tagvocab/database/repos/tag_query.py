# tagvocab/database/repos/tag_query.py
from __future__ import annotations
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import Select, false, or_, select

from tagvocab.common.naming.normalizer import NameNormalizer
from tagvocab.database.models import Tag as DBTag, Tagging as DBTagging
from tagvocab.domain.enums.usage_order import UsageOrder

DEFAULT_USAGE_LIMIT = 20


class TagQueryBuilder:
    """
    Builds (does not execute) SELECTs over the tag table, always filtered to
    one tenant. Values are bound parameters; LIKE patterns go through
    SQLAlchemy's autoescape so user text cannot act as a wildcard.
    """

    def __init__(self, normalizer: NameNormalizer) -> None:
        self.normalizer = normalizer

    def _base(self, tenant_id: UUID) -> Select:
        return select(DBTag).where(DBTag.tenant_id == tenant_id)

    # ---------- exact ----------

    def by_id(self, tenant_id: UUID, tag_id: UUID) -> Select:
        return self._base(tenant_id).where(DBTag.id == tag_id)

    def named(self, tenant_id: UUID, name: str) -> Select:
        return self._base(tenant_id).where(DBTag.name_key == self.normalizer.normalize(name)).limit(1)

    def named_any(self, tenant_id: UUID, names: Iterable[str]) -> Select:
        keys = self.normalizer.normalize_all(names)
        return self._base(tenant_id).where(DBTag.name_key.in_(keys))

    # ---------- substring ----------

    def _contains(self, substring: str):
        return DBTag.name_key.contains(self.normalizer.normalize(substring), autoescape=True)

    def named_like(self, tenant_id: UUID, substring: str) -> Select:
        return self._base(tenant_id).where(self._contains(substring)).order_by(DBTag.name.asc())

    def named_like_any(self, tenant_id: UUID, substrings: Iterable[str]) -> Select:
        clauses = [self._contains(s) for s in substrings]
        if not clauses:
            return self._base(tenant_id).where(false())
        return self._base(tenant_id).where(or_(*clauses)).order_by(DBTag.name.asc())

    # ---------- association ----------

    def for_context(self, tenant_id: UUID, context: str) -> Select:
        # EXISTS instead of JOIN + DISTINCT: one row per tag without DISTINCT over JSON columns.
        has_tagging = (
            select(DBTagging.id)
            .where(DBTagging.tag_id == DBTag.id, DBTagging.context == context)
            .exists()
        )
        return self._base(tenant_id).where(has_tagging).order_by(DBTag.name.asc())

    # ---------- usage ----------

    def by_usage(self, tenant_id: UUID, direction: UsageOrder, limit: Optional[int] = DEFAULT_USAGE_LIMIT) -> Select:
        count_col = DBTag.taggings_count.desc() if UsageOrder(direction) is UsageOrder.desc else DBTag.taggings_count.asc()
        stmt = self._base(tenant_id).order_by(count_col, DBTag.name.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    def most_used(self, tenant_id: UUID, limit: Optional[int] = DEFAULT_USAGE_LIMIT) -> Select:
        return self.by_usage(tenant_id, UsageOrder.desc, limit)

    def least_used(self, tenant_id: UUID, limit: Optional[int] = DEFAULT_USAGE_LIMIT) -> Select:
        return self.by_usage(tenant_id, UsageOrder.asc, limit)
