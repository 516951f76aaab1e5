"""Account balance computation.

balance = opening_balance + sum(credits) - sum(debits)

Only non-deleted transactions on the account count, and when the account has
an opening-balance date, only those dated on or after it. Earlier rows are not
netted into the opening balance: they are left out of both sums.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.context import UserContext
from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.models.account import Account
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.schemas.account import AccountBalance
from expense_tracker.services.aggregation import sum_by_type
from expense_tracker.services.ledger_query import DateWindow, LedgerQuery
from expense_tracker.utils.money import ZERO, to_money

logger = structlog.get_logger()


class BalanceService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def compute_balance(self, ctx: UserContext, account_id: int) -> AccountBalance:
        """Balance of one active account owned by the caller."""
        result = await self.db.execute(
            select(Account).where(
                Account.id == account_id,
                Account.user_id == ctx.user_id,
                Account.is_deleted.is_(False),
            )
        )
        account = result.scalar_one_or_none()
        if not account:
            raise NotFoundError("Account")
        return await self._balance_for(account)

    async def compute_all_balances(self, ctx: UserContext) -> list[AccountBalance]:
        """Balances of every active account, oldest first.

        A failure on one account degrades that entry to its opening balance
        and leaves the others untouched.
        """
        result = await self.db.execute(
            select(Account)
            .where(Account.user_id == ctx.user_id, Account.is_deleted.is_(False))
            .order_by(Account.created_at, Account.id)
        )
        accounts = result.scalars().all()

        balances = []
        for account in accounts:
            try:
                async with self.db.begin_nested():
                    balances.append(await self._balance_for(account))
            except Exception:
                logger.exception(
                    "balance_computation_failed",
                    account_id=account.id,
                    user_id=ctx.user_id,
                )
                balances.append(self._opening_only(account))
        return balances

    async def _balance_for(self, account: Account) -> AccountBalance:
        query = LedgerQuery(
            entity=Transaction,
            user_id=account.user_id,
            account_id=account.id,
            window=DateWindow(start=account.opening_balance_date),
        )
        totals = await sum_by_type(self.db, query)
        opening = to_money(account.opening_balance)
        credit = totals[TransactionType.CREDIT]
        debit = totals[TransactionType.DEBIT]
        return AccountBalance(
            account_id=account.id,
            account_name=account.name,
            opening_balance=opening,
            opening_balance_date=account.opening_balance_date,
            total_credit=credit,
            total_debit=debit,
            balance=opening + credit - debit,
        )

    @staticmethod
    def _opening_only(account: Account) -> AccountBalance:
        opening = to_money(account.opening_balance)
        return AccountBalance(
            account_id=account.id,
            account_name=account.name,
            opening_balance=opening,
            opening_balance_date=account.opening_balance_date,
            total_credit=ZERO,
            total_debit=ZERO,
            balance=opening,
        )
