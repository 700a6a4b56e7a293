from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_organization_repo
from usg_api.api.responses import success
from usg_api.models.organization import OrganizationCreate, OrganizationUpdate
from usg_api.repositories.organization import OrganizationRepository

router = APIRouter(prefix="/api/organizations", tags=["organizations"])


@router.get("")
async def list_organizations(
    type: Optional[str] = Query(None),
    college: Optional[str] = Query(None),
    repo: OrganizationRepository = Depends(get_organization_repo),
) -> JSONResponse:
    return success(await repo.get_active(type, college))


@router.post("")
async def create_organization(
    payload: OrganizationCreate,
    repo: OrganizationRepository = Depends(get_organization_repo),
) -> JSONResponse:
    return success(await repo.create(payload.to_record()), status_code=201)


@router.put("/{id}")
async def update_organization(
    id: str,
    payload: OrganizationUpdate,
    repo: OrganizationRepository = Depends(get_organization_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_organization(
    id: str,
    repo: OrganizationRepository = Depends(get_organization_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Organization deleted")
