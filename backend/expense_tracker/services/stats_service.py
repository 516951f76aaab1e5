"""Ledger statistics: totals, category and payment-method breakdowns, monthly series."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.context import UserContext
from expense_tracker.core.exceptions import ValidationError
from expense_tracker.models.expense import Expense
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.schemas.stats import ExpenseStats, MonthlyTotal, TransactionStats
from expense_tracker.services import aggregation
from expense_tracker.services.ledger_query import DateWindow, LedgerQuery


class StatsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def compute_stats(
        self,
        ctx: UserContext,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> TransactionStats:
        """Credit/debit totals and grouped breakdowns over the transaction ledger."""
        query = LedgerQuery(
            entity=Transaction,
            user_id=ctx.user_id,
            window=self._window(start_date, end_date),
        )
        totals = await aggregation.sum_by_type(self.db, query)
        return TransactionStats(
            total_credit=totals[TransactionType.CREDIT],
            total_debit=totals[TransactionType.DEBIT],
            by_category=await aggregation.group_by_category(self.db, query),
            by_payment_method=await aggregation.group_by_payment_method(self.db, query),
        )

    async def compute_expense_stats(
        self,
        ctx: UserContext,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> ExpenseStats:
        """Same report over the expense ledger, where every row is a debit."""
        query = LedgerQuery(
            entity=Expense,
            user_id=ctx.user_id,
            window=self._window(start_date, end_date),
        )
        return ExpenseStats(
            total=await aggregation.sum_amount(self.db, query),
            by_category=await aggregation.group_by_category(self.db, query),
            by_payment_method=await aggregation.group_by_payment_method(self.db, query),
        )

    async def compute_monthly_breakdown(
        self,
        ctx: UserContext,
        year: int | None = None,
        transaction_type: TransactionType = TransactionType.DEBIT,
    ) -> list[MonthlyTotal]:
        """Monthly totals of one transaction type within a calendar year.

        Defaults to debits, i.e. monthly spending, mirroring the expense ledger.
        """
        query = LedgerQuery(
            entity=Transaction,
            user_id=ctx.user_id,
            window=DateWindow.for_year(year or date.today().year),
            transaction_type=transaction_type,
        )
        return await aggregation.monthly_totals(self.db, query)

    async def compute_expense_monthly_breakdown(
        self, ctx: UserContext, year: int | None = None
    ) -> list[MonthlyTotal]:
        query = LedgerQuery(
            entity=Expense,
            user_id=ctx.user_id,
            window=DateWindow.for_year(year or date.today().year),
        )
        return await aggregation.monthly_totals(self.db, query)

    @staticmethod
    def _window(start_date: date | None, end_date: date | None) -> DateWindow:
        window = DateWindow(start=start_date, end=end_date)
        if window.is_inverted:
            raise ValidationError("start_date must be on or before end_date")
        return window
