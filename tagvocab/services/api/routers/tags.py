from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from tagvocab.common.settings import get_settings
from tagvocab.services.api.deps import get_tagging_service
from tagvocab.services.schemas import TagRead, TagResolveRequest
from tagvocab.services.tagging.service import TaggingService

cfg = get_settings()
router = APIRouter(prefix=cfg.api.prefix, tags=["tags"])


@router.post(
    "/tenants/{tenant_id}/tags/resolve",
    response_model=List[TagRead],
    status_code=HTTPStatus.CREATED,
)
def resolve_tags(
    tenant_id: UUID,
    payload: TagResolveRequest,
    svc: TaggingService = Depends(get_tagging_service),
) -> List[TagRead]:
    """Find-or-create every name; one tag per name, request order kept."""
    tags = svc.resolve(payload.names, tenant_id)
    return [TagRead.model_validate(t) for t in tags]


@router.get("/tenants/{tenant_id}/tags/most-used", response_model=List[TagRead])
def most_used(
    tenant_id: UUID,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    svc: TaggingService = Depends(get_tagging_service),
) -> List[TagRead]:
    return [TagRead.model_validate(t) for t in svc.most_used(tenant_id, limit)]


@router.get("/tenants/{tenant_id}/tags/least-used", response_model=List[TagRead])
def least_used(
    tenant_id: UUID,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    svc: TaggingService = Depends(get_tagging_service),
) -> List[TagRead]:
    return [TagRead.model_validate(t) for t in svc.least_used(tenant_id, limit)]


@router.get("/tenants/{tenant_id}/tags/context/{context}", response_model=List[TagRead])
def tags_for_context(
    tenant_id: UUID,
    context: str,
    svc: TaggingService = Depends(get_tagging_service),
) -> List[TagRead]:
    return [TagRead.model_validate(t) for t in svc.for_context(tenant_id, context)]


@router.get("/tenants/{tenant_id}/tags/{tag_id}", response_model=TagRead)
def get_tag(
    tenant_id: UUID,
    tag_id: UUID,
    svc: TaggingService = Depends(get_tagging_service),
) -> TagRead:
    tag = svc.store.get(tenant_id, tag_id)
    if not tag:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Tag not found")
    return TagRead.model_validate(tag)


@router.delete("/tenants/{tenant_id}/tags/{tag_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_tag(
    tenant_id: UUID,
    tag_id: UUID,
    svc: TaggingService = Depends(get_tagging_service),
) -> None:
    # taggings go with it (ORM + FK cascade); transactional_session commits
    if not svc.store.delete(tenant_id, tag_id):
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Tag not found")
