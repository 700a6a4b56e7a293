from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_issuance_repo
from usg_api.api.responses import success
from usg_api.core.constants import DEFAULT_ISSUANCE_LIMIT, MAX_PAGE_LIMIT
from usg_api.models.issuance import IssuanceCreate, IssuanceUpdate
from usg_api.repositories.issuance import IssuanceRepository

router = APIRouter(prefix="/api/issuances", tags=["issuances"])


@router.get("")
async def list_issuances(
    limit: int = Query(DEFAULT_ISSUANCE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    status: Optional[str] = Query(None),
    repo: IssuanceRepository = Depends(get_issuance_repo),
) -> JSONResponse:
    """Most recent issuances, optionally narrowed to one status."""
    return success(await repo.get_recent(limit=limit, status=status))


@router.get("/{id}")
async def get_issuance(
    id: str,
    repo: IssuanceRepository = Depends(get_issuance_repo),
) -> JSONResponse:
    return success(await repo.find_by_id(id))


@router.post("")
async def create_issuance(
    payload: IssuanceCreate,
    repo: IssuanceRepository = Depends(get_issuance_repo),
) -> JSONResponse:
    return success(await repo.create(payload.to_record()), status_code=201)


@router.put("/{id}")
async def update_issuance(
    id: str,
    payload: IssuanceUpdate,
    repo: IssuanceRepository = Depends(get_issuance_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_issuance(
    id: str,
    repo: IssuanceRepository = Depends(get_issuance_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Issuance deleted")
