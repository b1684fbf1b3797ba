from __future__ import annotations
from enum import StrEnum

class UsageOrder(StrEnum):
    desc = "desc"  # most used first
    asc = "asc"
