from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from tagvocab.common.naming.normalizer import NameNormalizer
from tagvocab.common.settings import Settings, get_settings
from tagvocab.database.repos.tag_repo import SqlAlchemyTagStore
from tagvocab.domain.entities.tag import Tag
from tagvocab.domain.policies.tag_resolver import TagResolver


class TaggingService:
    """
    Wires a store and a resolver onto one Session with the configured case
    policy. The policy is read once, here; swapping settings later only
    affects services built afterwards.
    """

    def __init__(self, db: Session, *, cfg: Optional[Settings] = None, strict_case_match: Optional[bool] = None):
        self.db = db
        self.cfg = cfg or get_settings()
        strict = self.cfg.tagging.strict_case_match if strict_case_match is None else strict_case_match
        self.normalizer = NameNormalizer.from_flag(strict)
        self.store = SqlAlchemyTagStore(db, self.normalizer)
        self.resolver = TagResolver(
            self.store,
            self.normalizer,
            max_name_length=self.cfg.tagging.max_name_length,
            max_attempts=self.cfg.tagging.resolve_max_attempts,
            validate_name_uniqueness=self.cfg.tagging.validate_name_uniqueness,
        )

    def resolve(self, names: List[str], tenant_id: UUID) -> List[Tag]:
        return self.resolver.resolve(names, tenant_id)

    def most_used(self, tenant_id: UUID, limit: Optional[int] = None) -> List[Tag]:
        return self.store.most_used(tenant_id, limit or self.cfg.tagging.default_usage_limit)

    def least_used(self, tenant_id: UUID, limit: Optional[int] = None) -> List[Tag]:
        return self.store.least_used(tenant_id, limit or self.cfg.tagging.default_usage_limit)

    def for_context(self, tenant_id: UUID, context: Optional[str] = None) -> List[Tag]:
        return self.store.find_by_context(tenant_id, context or self.cfg.tagging.default_context)
