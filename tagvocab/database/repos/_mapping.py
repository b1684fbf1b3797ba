# tagvocab/database/repos/_mapping.py
from __future__ import annotations
from tagvocab.database.models import Tag as DBTag
from tagvocab.domain.entities.tag import Tag as DomainTag

def to_domain_tag(row: DBTag) -> DomainTag:
    return DomainTag(
        tenant_id=row.tenant_id,
        comparison_key=row.name_key,
        name=row.name,
        id=row.id,
        taggings_count=int(row.taggings_count or 0),
    )
