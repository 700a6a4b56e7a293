from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, HttpUrl

from usg_api.core.constants import TransactionType
from usg_api.models.base import WriteModel


class FinancialTransactionCreate(WriteModel):
    description: str = Field(min_length=3, max_length=500)
    amount: float = Field(gt=0, description="Amount must be positive")
    transaction_type: TransactionType
    category: Optional[str] = Field(default=None, max_length=100)
    transaction_date: datetime
    receipt_url: Optional[HttpUrl] = None


class FinancialTransactionUpdate(WriteModel):
    description: Optional[str] = Field(default=None, min_length=3, max_length=500)
    amount: Optional[float] = Field(default=None, gt=0)
    transaction_type: Optional[TransactionType] = None
    category: Optional[str] = Field(default=None, max_length=100)
    transaction_date: Optional[datetime] = None
    receipt_url: Optional[HttpUrl] = None
