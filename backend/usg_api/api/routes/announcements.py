from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_announcement_repo, require_admin
from usg_api.api.responses import success
from usg_api.core.constants import AnnouncementCategory
from usg_api.models.announcement import AnnouncementCreate, AnnouncementUpdate
from usg_api.repositories.announcement import AnnouncementRepository

router = APIRouter(prefix="/api/announcements", tags=["announcements"])


@router.get("")
async def list_announcements(
    request: Request,
    category: Optional[AnnouncementCategory] = Query(None),
    include_drafts: bool = Query(False, alias="all", description="Include drafts (admin only)"),
    repo: AnnouncementRepository = Depends(get_announcement_repo),
) -> JSONResponse:
    """Published announcements, newest first.

    Admins may pass ``all=true`` to include drafts.
    """
    category_value = category.value if category else None
    if include_drafts:
        require_admin(request)
        return success(await repo.get_all(category_value))
    return success(await repo.get_published(category_value))


@router.get("/{id}")
async def get_announcement(
    id: str,
    repo: AnnouncementRepository = Depends(get_announcement_repo),
) -> JSONResponse:
    return success(await repo.find_by_id(id))


@router.post("")
async def create_announcement(
    payload: AnnouncementCreate,
    repo: AnnouncementRepository = Depends(get_announcement_repo),
) -> JSONResponse:
    return success(await repo.create(payload.to_record()), status_code=201)


@router.put("/{id}")
async def update_announcement(
    id: str,
    payload: AnnouncementUpdate,
    repo: AnnouncementRepository = Depends(get_announcement_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_announcement(
    id: str,
    repo: AnnouncementRepository = Depends(get_announcement_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Announcement deleted")
