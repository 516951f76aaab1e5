"""Shared schema types."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

from expense_tracker.utils.money import to_money

# Monetary values always leave the API as strings with exactly two decimals
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(to_money(v)), return_type=str, when_used="json"),
]

# Incoming amounts: strictly positive, at most two fractional digits
PositiveAmount = Annotated[Decimal, Field(gt=0, max_digits=12, decimal_places=2)]


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
