# tagvocab/common/naming/normalizer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from tagvocab.domain.enums.case_policy import CasePolicy


@dataclass(frozen=True)
class NameNormalizer:
    """
    Turns a raw tag name into its comparison key under one case policy.

      strict            -> the raw text, untouched ("Ruby" != "ruby")
      case_insensitive  -> str.lower() of the raw text; full Unicode mapping,
                           so "ÄRGER" -> "ärger" and "ΣΊΣΥΦΟΣ" -> "σίσυφος"

    Keys are compared as plain strings (code point for code point), never
    through a database collation. The normalizer never raises: None becomes
    "" and anything else goes through str(). Rejecting bad names is the
    validator's job.
    """
    policy: CasePolicy = CasePolicy.case_insensitive

    @classmethod
    def from_flag(cls, strict_case_match: bool) -> "NameNormalizer":
        return cls(CasePolicy.from_flag(strict_case_match))

    @property
    def strict(self) -> bool:
        return self.policy is CasePolicy.strict

    def normalize(self, raw: Any) -> str:
        if raw is None:
            return ""
        text = raw if isinstance(raw, str) else str(raw)
        if self.strict:
            return text
        return text.lower()

    def normalize_all(self, names: Iterable[Any]) -> list[str]:
        """Distinct keys, first-seen order."""
        seen: dict[str, None] = {}
        for n in names:
            seen.setdefault(self.normalize(n), None)
        return list(seen)
