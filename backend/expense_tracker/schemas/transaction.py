"""Transaction schemas for request/response validation."""

import datetime as dt

from pydantic import BaseModel, Field

from expense_tracker.models.transaction import PaymentMethod, TransactionType
from expense_tracker.schemas.common import Money, Pagination, PositiveAmount


class TransactionCreate(BaseModel):
    account_id: int
    amount: PositiveAmount
    description: str = Field(min_length=1, max_length=255)
    date: dt.date
    transaction_type: TransactionType
    category_id: int | None = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: str | None = None


class TransactionUpdate(BaseModel):
    account_id: int | None = None
    amount: PositiveAmount | None = None
    description: str | None = Field(default=None, min_length=1, max_length=255)
    date: dt.date | None = None
    transaction_type: TransactionType | None = None
    category_id: int | None = None
    payment_method: PaymentMethod | None = None
    notes: str | None = None


class TransactionResponse(BaseModel):
    id: int
    account_id: int
    category_id: int | None = None
    category_name: str | None = None
    amount: Money
    description: str
    date: dt.date
    transaction_type: str
    payment_method: str
    notes: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}


class PaginatedTransactions(BaseModel):
    data: list[TransactionResponse]
    meta: Pagination
