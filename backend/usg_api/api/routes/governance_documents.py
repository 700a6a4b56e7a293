from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_governance_document_repo
from usg_api.api.responses import success
from usg_api.core.constants import GovernanceDocumentType
from usg_api.models.governance_document import (
    GovernanceDocumentCreate,
    GovernanceDocumentUpdate,
)
from usg_api.repositories.governance_document import GovernanceDocumentRepository

router = APIRouter(prefix="/api/governance-documents", tags=["governance-documents"])


@router.get("")
async def list_governance_documents(
    type: Optional[GovernanceDocumentType] = Query(None),
    repo: GovernanceDocumentRepository = Depends(get_governance_document_repo),
) -> JSONResponse:
    return success(await repo.get_active(type.value if type else None))


@router.post("")
async def create_governance_document(
    payload: GovernanceDocumentCreate,
    repo: GovernanceDocumentRepository = Depends(get_governance_document_repo),
) -> JSONResponse:
    return success(await repo.create(payload.to_record()), status_code=201)


@router.put("/{id}")
async def update_governance_document(
    id: str,
    payload: GovernanceDocumentUpdate,
    repo: GovernanceDocumentRepository = Depends(get_governance_document_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_governance_document(
    id: str,
    repo: GovernanceDocumentRepository = Depends(get_governance_document_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Governance document deleted")
