from tagvocab.services.schemas.tags import (
    TagRead,
    TagResolveRequest,
)

__all__ = [
    "TagRead",
    "TagResolveRequest",
]
