"""Statistics report schemas."""

from pydantic import BaseModel

from expense_tracker.schemas.common import Money


class CategoryBreakdown(BaseModel):
    category_id: int | None
    category_name: str
    category_icon: str | None = None
    category_color: str | None = None
    transaction_type: str | None = None  # absent on the expense ledger
    total: Money
    count: int


class PaymentMethodBreakdown(BaseModel):
    payment_method: str
    transaction_type: str | None = None
    total: Money
    count: int


class TransactionStats(BaseModel):
    total_credit: Money
    total_debit: Money
    by_category: list[CategoryBreakdown]
    by_payment_method: list[PaymentMethodBreakdown]


class ExpenseStats(BaseModel):
    total: Money
    by_category: list[CategoryBreakdown]
    by_payment_method: list[PaymentMethodBreakdown]


class MonthlyTotal(BaseModel):
    month: int  # 1-12
    total: Money
    count: int
