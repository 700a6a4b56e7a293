from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_committee_repo
from usg_api.api.responses import success
from usg_api.models.committee import CommitteeCreate, CommitteeUpdate
from usg_api.repositories.committee import CommitteeRepository

router = APIRouter(prefix="/api/committees", tags=["committees"])


@router.get("")
async def list_committees(
    repo: CommitteeRepository = Depends(get_committee_repo),
) -> JSONResponse:
    return success(await repo.get_active())


@router.post("")
async def create_committee(
    payload: CommitteeCreate,
    repo: CommitteeRepository = Depends(get_committee_repo),
) -> JSONResponse:
    return success(await repo.create(payload.to_record()), status_code=201)


@router.put("/{id}")
async def update_committee(
    id: str,
    payload: CommitteeUpdate,
    repo: CommitteeRepository = Depends(get_committee_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_committee(
    id: str,
    repo: CommitteeRepository = Depends(get_committee_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Committee deleted")
