from __future__ import annotations
from enum import StrEnum

class CasePolicy(StrEnum):
    strict = "strict"
    case_insensitive = "case_insensitive"

    @classmethod
    def from_flag(cls, strict_case_match: bool) -> "CasePolicy":
        return cls.strict if strict_case_match else cls.case_insensitive
