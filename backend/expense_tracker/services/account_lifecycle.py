"""Rules deciding whether an account may be (soft-)deleted."""

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.context import UserContext
from expense_tracker.models.account import Account, AccountType
from expense_tracker.models.transaction import Transaction

DEFAULT_ACCOUNT_NAME = "Cash"


@dataclass(frozen=True)
class DeletionVerdict:
    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> "DeletionVerdict":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "DeletionVerdict":
        return cls(allowed=False, reason=reason)


class AccountLifecycleGuard:
    """Advisory checks; callers decide what to do with a denial."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def can_delete(self, account: Account, ctx: UserContext) -> DeletionVerdict:
        if await self._is_default_account(account, ctx):
            return DeletionVerdict.deny(f"Cannot delete the default {DEFAULT_ACCOUNT_NAME} account")

        count = await self.count_transactions(account)
        if count > 0:
            return DeletionVerdict.deny(
                f"Cannot delete account with {count} transaction(s). "
                "Please delete or move the transactions first."
            )
        return DeletionVerdict.allow()

    async def count_transactions(self, account: Account) -> int:
        result = await self.db.execute(
            select(func.count(Transaction.id)).where(
                Transaction.account_id == account.id,
                Transaction.is_deleted.is_(False),
            )
        )
        return result.scalar() or 0

    async def _is_default_account(self, account: Account, ctx: UserContext) -> bool:
        """The user's oldest active account, if it is still the seeded cash account."""
        if account.name.lower() != DEFAULT_ACCOUNT_NAME.lower() or account.type != AccountType.CASH.value:
            return False

        result = await self.db.execute(
            select(Account.id)
            .where(Account.user_id == ctx.user_id, Account.is_deleted.is_(False))
            .order_by(Account.created_at, Account.id)
            .limit(1)
        )
        return result.scalar_one_or_none() == account.id
