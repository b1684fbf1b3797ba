# tagvocab/database/repos/tag_repo.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from tagvocab.common.logging import get_logger
from tagvocab.common.naming.normalizer import NameNormalizer
from tagvocab.database.models import Tag as DBTag
from tagvocab.database.repos._mapping import to_domain_tag
from tagvocab.database.repos.tag_query import TagQueryBuilder
from tagvocab.domain.entities.tag import InsertResult, Tag as DomainTag
from tagvocab.domain.enums.usage_order import UsageOrder
from tagvocab.domain.errors import StoreUnavailable

logger = get_logger(__name__)

UNIQUE_NAME_CONSTRAINT = "uq_tag_tenant_name_key"


def _is_duplicate_name(exc: IntegrityError) -> bool:
    """
    True when the violation is our (tenant_id, name_key) unique constraint.
    Postgres names the constraint; SQLite lists the columns instead.
    """
    msg = str(exc.orig)
    return UNIQUE_NAME_CONSTRAINT in msg or "UNIQUE constraint failed: tag.tenant_id, tag.name_key" in msg


@contextmanager
def _store_errors() -> Iterator[None]:
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        raise StoreUnavailable(str(e.orig or e)) from e


class SqlAlchemyTagStore:
    """
    SQLAlchemy-backed tag store. Satisfies TagStorePort via structural typing.

    Notes
    -----
    • Statements come from TagQueryBuilder; this class executes them and maps
      rows to domain Tags.
    • insert_if_absent runs inside a SAVEPOINT. A unique violation rolls back
      only that savepoint, so the caller's transaction (and everything it
      already flushed) survives the lost race.
    • Nothing here commits; the caller controls the transaction.
    """

    def __init__(self, db: Session, normalizer: NameNormalizer) -> None:
        self.db = db
        self.normalizer = normalizer
        self.queries = TagQueryBuilder(normalizer)

    def _all(self, stmt: Select) -> List[DomainTag]:
        with _store_errors():
            rows = self.db.execute(stmt).scalars().all()
        return [to_domain_tag(r) for r in rows]

    # -------------------------------------------------------------------------
    # TagStorePort
    # -------------------------------------------------------------------------
    def find_exact(self, tenant_id: UUID, name: str) -> Optional[DomainTag]:
        with _store_errors():
            row = self.db.execute(self.queries.named(tenant_id, name)).scalars().first()
        return to_domain_tag(row) if row else None

    def find_any_of(self, tenant_id: UUID, names: Iterable[str]) -> List[DomainTag]:
        names = list(names)
        if not names:
            return []
        return self._all(self.queries.named_any(tenant_id, names))

    def find_like(self, tenant_id: UUID, substring: str) -> List[DomainTag]:
        return self._all(self.queries.named_like(tenant_id, substring))

    def find_like_any(self, tenant_id: UUID, substrings: Iterable[str]) -> List[DomainTag]:
        return self._all(self.queries.named_like_any(tenant_id, list(substrings)))

    def find_by_context(self, tenant_id: UUID, context: str) -> List[DomainTag]:
        return self._all(self.queries.for_context(tenant_id, context))

    def insert_if_absent(self, tenant_id: UUID, name: str) -> InsertResult:
        row = DBTag(tenant_id=tenant_id, name=name, name_key=self.normalizer.normalize(name))
        try:
            with _store_errors(), self.db.begin_nested():
                self.db.add(row)
                self.db.flush()
        except IntegrityError as e:
            if not _is_duplicate_name(e):
                raise
            logger.debug("unique violation inserting tag %r for tenant %s", name, tenant_id)
            return InsertResult.conflicted(name)
        return InsertResult.created(to_domain_tag(row))

    def order_by_usage(self, tenant_id: UUID, direction: UsageOrder, limit: int) -> List[DomainTag]:
        return self._all(self.queries.by_usage(tenant_id, direction, limit))

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------
    def most_used(self, tenant_id: UUID, limit: int = 20) -> List[DomainTag]:
        return self.order_by_usage(tenant_id, UsageOrder.desc, limit)

    def least_used(self, tenant_id: UUID, limit: int = 20) -> List[DomainTag]:
        return self.order_by_usage(tenant_id, UsageOrder.asc, limit)

    def _row(self, tenant_id: UUID, tag_id: UUID) -> Optional[DBTag]:
        return self.db.execute(self.queries.by_id(tenant_id, tag_id)).scalars().first()

    def get(self, tenant_id: UUID, tag_id: UUID) -> Optional[DomainTag]:
        with _store_errors():
            row = self._row(tenant_id, tag_id)
        return to_domain_tag(row) if row else None

    def delete(self, tenant_id: UUID, tag_id: UUID) -> bool:
        """
        Delete a tenant's tag and, through the cascade, its taggings. False if
        the tenant has no such tag (including ids owned by another tenant).
        """
        with _store_errors():
            row = self._row(tenant_id, tag_id)
            if not row:
                return False
            self.db.delete(row)
            self.db.flush()
        return True
