# tagvocab/domain/policies/tag_resolver.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from tagvocab.common.logging import get_logger
from tagvocab.common.naming.normalizer import NameNormalizer
from tagvocab.common.settings import get_settings
from tagvocab.domain.entities.tag import Tag
from tagvocab.domain.errors import DuplicateTagCreationFailed, ValidationError
from tagvocab.domain.ports.tag_store import TagStorePort

logger = get_logger(__name__)


class TagResolver:
    """
    Turns free-text names into canonical Tags for a tenant, creating the ones
    that do not exist yet.

    There is no lock here. Correctness under concurrent callers comes from the
    store's unique (tenant_id, name_key) constraint: we look everything up in
    one batch, insert what is missing, and when an insert loses a race we read
    the winner's row back. The resolver never commits; the caller owns the
    transaction.
    """

    def __init__(
        self,
        store: TagStorePort,
        normalizer: NameNormalizer,
        *,
        max_name_length: Optional[int] = None,
        max_attempts: Optional[int] = None,
        validate_name_uniqueness: Optional[bool] = None,
    ) -> None:
        store_normalizer = getattr(store, "normalizer", None)
        if store_normalizer is not None and store_normalizer != normalizer:
            raise ValueError(
                f"Store normalizer policy {store_normalizer.policy} does not match resolver policy {normalizer.policy}"
            )
        cfg = get_settings().tagging
        self.store = store
        self.normalizer = normalizer
        self.max_name_length = int(max_name_length or cfg.max_name_length)
        self.max_attempts = max(1, int(max_attempts or cfg.resolve_max_attempts))
        self.validate_name_uniqueness = (
            cfg.validate_name_uniqueness if validate_name_uniqueness is None else validate_name_uniqueness
        )

    # ---------------- validation ----------------

    def validate_name(self, name: Any) -> str:
        if not isinstance(name, str):
            raise ValidationError(name, "must be a string")
        if not name.strip():
            raise ValidationError(name, "can't be blank")
        if len(name) > self.max_name_length:
            raise ValidationError(name, f"is too long (maximum is {self.max_name_length} characters)")
        try:
            name.encode("utf-8")
        except UnicodeEncodeError:
            # lone surrogates; no driver can send them
            raise ValidationError(name, "is not valid UTF-8") from None
        return name

    # ---------------- public ----------------

    def resolve(self, names: Iterable[str], tenant_id: UUID) -> List[Tag]:
        """
        One Tag per input name, in input order. Names sharing a comparison key
        come back as the same Tag. Either every name resolves or the call
        raises; nothing partial is returned.
        """
        requested = [self.validate_name(n) for n in names]
        if not requested:
            return []

        keys = [self.normalizer.normalize(n) for n in requested]
        bound = self._lookup(tenant_id, requested)

        for name, key in zip(requested, keys):
            if key in bound:
                continue
            self._create_or_fetch(tenant_id, name, key, requested, bound)

        return [bound[k] for k in keys]

    def resolve_one(self, name: str, tenant_id: UUID) -> Tag:
        return self.resolve([name], tenant_id)[0]

    def create(self, name: str, tenant_id: UUID) -> Tag:
        """
        Direct create. With uniqueness validation on, an existing name is a
        ValidationError; an insert that still loses a race raises DuplicateKey.
        """
        self.validate_name(name)
        if self.validate_name_uniqueness and self.store.find_exact(tenant_id, name) is not None:
            raise ValidationError(name, "has already been taken")
        return self.store.insert_if_absent(tenant_id, name).unwrap(tenant_id)

    # ---------------- internals ----------------

    def _lookup(self, tenant_id: UUID, names: Sequence[str]) -> Dict[str, Tag]:
        return {t.comparison_key: t for t in self.store.find_any_of(tenant_id, names)}

    def _create_or_fetch(
        self,
        tenant_id: UUID,
        name: str,
        key: str,
        requested: Sequence[str],
        bound: Dict[str, Tag],
    ) -> Tag:
        for attempt in range(1, self.max_attempts + 1):
            result = self.store.insert_if_absent(tenant_id, name)
            if not result.conflict:
                bound[key] = result.tag
                return result.tag

            logger.info(
                "tag %r was created concurrently for tenant %s (attempt %d/%d); re-reading",
                name, tenant_id, attempt, self.max_attempts,
            )
            # Another writer won; its row should be visible now. Refresh the
            # whole batch so later names can skip their own insert.
            for k, tag in self._lookup(tenant_id, requested).items():
                bound.setdefault(k, tag)
            if key in bound:
                return bound[key]

        logger.warning(
            "giving up on tag %r for tenant %s after %d conflicting inserts",
            name, tenant_id, self.max_attempts,
        )
        raise DuplicateTagCreationFailed(name, attempts=self.max_attempts)
