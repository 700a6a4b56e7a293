from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_officer_repo
from usg_api.api.responses import success
from usg_api.models.officer import OfficerCreate, OfficerUpdate
from usg_api.repositories.officer import OfficerRepository

router = APIRouter(prefix="/api/officers", tags=["officers"])


@router.get("")
async def list_officers(
    branch: Optional[str] = Query(None),
    repo: OfficerRepository = Depends(get_officer_repo),
) -> JSONResponse:
    return success(await repo.get_active(branch))


@router.post("")
async def create_officer(
    payload: OfficerCreate,
    repo: OfficerRepository = Depends(get_officer_repo),
) -> JSONResponse:
    return success(await repo.create(payload.to_record()), status_code=201)


@router.put("/{id}")
async def update_officer(
    id: str,
    payload: OfficerUpdate,
    repo: OfficerRepository = Depends(get_officer_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_officer(
    id: str,
    repo: OfficerRepository = Depends(get_officer_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Officer deleted")
