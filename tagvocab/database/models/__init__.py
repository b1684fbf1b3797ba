# tagvocab/database/models/__init__.py

from tagvocab.database.core.main import Base
from tagvocab.database.models.tenant import Tenant
from tagvocab.database.models.taxonomy import (
    Tag,
    Tagging,
)

__all__ = [
    "Base",
    "Tenant",
    "Tag",
    "Tagging",
]
