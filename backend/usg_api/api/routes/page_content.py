from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_page_content_repo
from usg_api.api.responses import success
from usg_api.core.exceptions import NotFoundError, RecordNotFoundError
from usg_api.models.content import InsertContent, PageContentUpdate, PageContentUpsert
from usg_api.repositories.page_content import PageContentRepository

router = APIRouter(prefix="/api/page-content", tags=["page-content"])


@router.get("")
async def list_page_content(
    active: bool = Query(False, description="Only active rows"),
    repo: PageContentRepository = Depends(get_page_content_repo),
) -> JSONResponse:
    if active:
        return success(await repo.get_all_active())
    return success(await repo.get_all())


@router.get("/{slug}")
async def get_page_content(
    slug: str,
    repo: PageContentRepository = Depends(get_page_content_repo),
) -> JSONResponse:
    try:
        record = await repo.get_by_slug(slug)
    except RecordNotFoundError:
        raise NotFoundError("Page content") from None
    return success(record)


@router.post("")
async def upsert_page_content(
    payload: PageContentUpsert,
    repo: PageContentRepository = Depends(get_page_content_repo),
) -> JSONResponse:
    """Create a row, or update it when the body carries an ``id``."""
    operation = payload.to_operation()
    record = await repo.upsert(operation)
    status_code = 201 if isinstance(operation, InsertContent) else 200
    return success(record, status_code=status_code)


@router.put("/{id}")
async def update_page_content(
    id: str,
    payload: PageContentUpdate,
    repo: PageContentRepository = Depends(get_page_content_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_page_content(
    id: str,
    repo: PageContentRepository = Depends(get_page_content_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Content deleted")
