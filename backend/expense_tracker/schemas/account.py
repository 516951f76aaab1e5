"""Account schemas for request/response validation."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from expense_tracker.models.account import AccountType
from expense_tracker.schemas.common import Money


class AccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    type: AccountType
    opening_balance: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=12, decimal_places=2)
    opening_balance_date: date | None = None  # defaults to today


class AccountUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    type: AccountType | None = None
    opening_balance: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    opening_balance_date: date | None = None


class AccountResponse(BaseModel):
    id: int
    name: str
    type: str
    opening_balance: Money
    opening_balance_date: date | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AccountBalance(BaseModel):
    """Point-in-time balance of one account."""

    account_id: int
    account_name: str
    opening_balance: Money
    opening_balance_date: date | None = None
    total_credit: Money
    total_debit: Money
    balance: Money
