from tagvocab.domain.enums.case_policy import CasePolicy
from tagvocab.domain.enums.usage_order import UsageOrder
__all__ = [
    "CasePolicy",
    "UsageOrder",
]
