# tagvocab/domain/errors.py
from __future__ import annotations

from typing import Any, Optional


class TagVocabError(Exception):
    """Base class for errors raised by the tag vocabulary."""


class ValidationError(TagVocabError):
    """
    A name was rejected before any write: blank, not text, too long, or
    (direct create with uniqueness validation on) already taken.
    """

    def __init__(self, name: Any, message: str) -> None:
        self.name = name
        self.message = message
        super().__init__(f"Tag name {name!r} {message}")


class DuplicateKey(TagVocabError):
    """The store's unique constraint rejected an insert (another writer got there first)."""

    def __init__(self, name: str, tenant_id: Any = None) -> None:
        self.name = name
        self.tenant_id = tenant_id
        super().__init__(f"'{name}' already exists for tenant {tenant_id}")


class DuplicateTagCreationFailed(TagVocabError):
    """
    Every insert attempt for `name` conflicted, yet no matching row could be
    read back. Points at heavy contention or an inconsistent store; callers
    may retry with backoff.
    """

    def __init__(self, name: str, attempts: Optional[int] = None) -> None:
        self.name = name
        self.attempts = attempts
        super().__init__(f"'{name}' has already been taken")


class StoreUnavailable(TagVocabError):
    """Transport or connectivity failure talking to the tag store. Not retried here."""
