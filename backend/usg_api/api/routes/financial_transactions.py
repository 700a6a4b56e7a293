from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_financial_transaction_repo
from usg_api.api.responses import success
from usg_api.core.constants import DEFAULT_TRANSACTION_LIMIT, MAX_PAGE_LIMIT
from usg_api.models.financial_transaction import (
    FinancialTransactionCreate,
    FinancialTransactionUpdate,
)
from usg_api.repositories.financial_transaction import FinancialTransactionRepository

router = APIRouter(prefix="/api/financial-transactions", tags=["financial-transactions"])


@router.get("")
async def list_transactions(
    search: Optional[str] = Query(None, max_length=200),
    limit: int = Query(DEFAULT_TRANSACTION_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    repo: FinancialTransactionRepository = Depends(get_financial_transaction_repo),
) -> JSONResponse:
    """Recent transactions, or every match for ``search`` across description and category."""
    if search and search.strip():
        return success(await repo.search(search.strip()))
    return success(await repo.get_recent(limit))


@router.get("/{id}")
async def get_transaction(
    id: str,
    repo: FinancialTransactionRepository = Depends(get_financial_transaction_repo),
) -> JSONResponse:
    return success(await repo.find_by_id(id))


@router.post("")
async def create_transaction(
    payload: FinancialTransactionCreate,
    repo: FinancialTransactionRepository = Depends(get_financial_transaction_repo),
) -> JSONResponse:
    return success(await repo.create(payload.to_record()), status_code=201)


@router.put("/{id}")
async def update_transaction(
    id: str,
    payload: FinancialTransactionUpdate,
    repo: FinancialTransactionRepository = Depends(get_financial_transaction_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_transaction(
    id: str,
    repo: FinancialTransactionRepository = Depends(get_financial_transaction_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Transaction deleted")
