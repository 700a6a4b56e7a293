from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_site_content_repo
from usg_api.api.responses import success
from usg_api.models.content import InsertContent, SiteContentUpdate, SiteContentUpsert
from usg_api.repositories.site_content import SiteContentRepository

router = APIRouter(prefix="/api/site-content", tags=["site-content"])


@router.get("")
async def list_site_content(
    section: Optional[str] = Query(None, description="Filter by section_type"),
    active: bool = Query(False, description="Only active rows"),
    repo: SiteContentRepository = Depends(get_site_content_repo),
) -> JSONResponse:
    if active:
        return success(await repo.get_active(section))
    return success(await repo.get_all(section))


@router.post("")
async def upsert_site_content(
    payload: SiteContentUpsert,
    repo: SiteContentRepository = Depends(get_site_content_repo),
) -> JSONResponse:
    """Create a row, or update it when the body carries an ``id``."""
    operation = payload.to_operation()
    record = await repo.upsert(operation)
    status_code = 201 if isinstance(operation, InsertContent) else 200
    return success(record, status_code=status_code)


@router.put("/{id}")
async def update_site_content(
    id: str,
    payload: SiteContentUpdate,
    repo: SiteContentRepository = Depends(get_site_content_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_site_content(
    id: str,
    repo: SiteContentRepository = Depends(get_site_content_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Content deleted")
