"""Expense schemas (single-ledger API)."""

import datetime as dt

from pydantic import BaseModel, Field

from expense_tracker.models.transaction import PaymentMethod
from expense_tracker.schemas.common import Money, Pagination, PositiveAmount


class ExpenseCreate(BaseModel):
    amount: PositiveAmount
    description: str = Field(min_length=1, max_length=255)
    date: dt.date
    category_id: int | None = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: str | None = None


class ExpenseUpdate(BaseModel):
    amount: PositiveAmount | None = None
    description: str | None = Field(default=None, min_length=1, max_length=255)
    date: dt.date | None = None
    category_id: int | None = None
    payment_method: PaymentMethod | None = None
    notes: str | None = None


class ExpenseResponse(BaseModel):
    id: int
    category_id: int | None = None
    amount: Money
    description: str
    date: dt.date
    payment_method: str
    notes: str | None = None
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class PaginatedExpenses(BaseModel):
    data: list[ExpenseResponse]
    meta: Pagination
