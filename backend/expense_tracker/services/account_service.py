"""Account management service."""

from datetime import date

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.context import UserContext
from expense_tracker.core.exceptions import ConflictError, NotFoundError
from expense_tracker.models.account import Account
from expense_tracker.schemas.account import AccountCreate, AccountUpdate
from expense_tracker.services.account_lifecycle import AccountLifecycleGuard

logger = structlog.get_logger()


class AccountService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_accounts(self, ctx: UserContext) -> list[Account]:
        """List active accounts, oldest first."""
        result = await self.db.execute(
            select(Account)
            .where(Account.user_id == ctx.user_id, Account.is_deleted.is_(False))
            .order_by(Account.created_at, Account.id)
        )
        return list(result.scalars().all())

    async def create_account(self, data: AccountCreate, ctx: UserContext) -> Account:
        """Create an account; the opening balance takes effect today unless dated."""
        account = Account(
            user_id=ctx.user_id,
            name=data.name,
            type=data.type.value,
            opening_balance=data.opening_balance,
            opening_balance_date=data.opening_balance_date or date.today(),
        )
        self.db.add(account)
        await self.db.flush()
        await self.db.refresh(account)
        return account

    async def get_account(self, account_id: int, ctx: UserContext) -> Account:
        return await self._get_user_account(account_id, ctx)

    async def update_account(self, account_id: int, data: AccountUpdate, ctx: UserContext) -> Account:
        # Moving the opening date later silently drops older transactions from
        # the balance; that is accepted rather than rejected.
        account = await self._get_user_account(account_id, ctx)
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("type") is not None:
            update_data["type"] = update_data["type"].value
        for key, value in update_data.items():
            if value is None and key != "opening_balance_date":
                continue
            setattr(account, key, value)
        await self.db.flush()
        await self.db.refresh(account)
        return account

    async def delete_account(self, account_id: int, ctx: UserContext) -> None:
        """Soft-delete an account, unless a lifecycle rule forbids it."""
        account = await self._get_user_account(account_id, ctx)
        verdict = await AccountLifecycleGuard(self.db).can_delete(account, ctx)
        if not verdict.allowed:
            logger.info(
                "account_delete_refused",
                account_id=account.id,
                user_id=ctx.user_id,
                reason=verdict.reason,
            )
            raise ConflictError(verdict.reason)

        account.is_deleted = True
        await self.db.flush()
        logger.info("account_deleted", account_id=account.id, user_id=ctx.user_id)

    async def _get_user_account(self, account_id: int, ctx: UserContext) -> Account:
        """Fetch an active account; another user's account is reported as missing."""
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
        return account
