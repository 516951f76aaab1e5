"""Transaction management service."""

from datetime import date
from math import ceil

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.context import UserContext
from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.models.account import Account
from expense_tracker.models.category import Category
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.schemas.transaction import TransactionCreate, TransactionUpdate
from expense_tracker.services.ledger_query import DateWindow


class TransactionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_transactions(
        self,
        ctx: UserContext,
        page: int = 1,
        limit: int = 10,
        start_date: date | None = None,
        end_date: date | None = None,
        account_id: int | None = None,
        category_id: int | None = None,
        search: str | None = None,
        transaction_type: TransactionType | None = None,
    ) -> dict:
        """List non-deleted transactions with pagination and filters, newest first."""
        query = select(Transaction).where(
            Transaction.user_id == ctx.user_id,
            Transaction.is_deleted.is_(False),
            *DateWindow(start=start_date, end=end_date).clauses(Transaction.date),
        )
        if account_id:
            query = query.where(Transaction.account_id == account_id)
        if category_id:
            query = query.where(Transaction.category_id == category_id)
        if transaction_type:
            query = query.where(Transaction.transaction_type == transaction_type.value)
        if search:
            query = query.where(Transaction.description.ilike(f"%{search}%"))

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        query = (
            query.order_by(Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        transactions = result.scalars().all()

        category_names = await self._category_names(ctx, {t.category_id for t in transactions})
        return {
            "data": [self._serialize(t, category_names.get(t.category_id)) for t in transactions],
            "meta": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": ceil(total / limit) if limit else 0,
            },
        }

    async def create_transaction(self, data: TransactionCreate, ctx: UserContext) -> dict:
        await self._verify_account_ownership(data.account_id, ctx)
        category_name = None
        if data.category_id is not None:
            category_name = (await self._verify_category_ownership(data.category_id, ctx)).name

        txn = Transaction(
            user_id=ctx.user_id,
            account_id=data.account_id,
            category_id=data.category_id,
            amount=data.amount,
            description=data.description,
            date=data.date,
            transaction_type=data.transaction_type.value,
            payment_method=data.payment_method.value,
            notes=data.notes,
        )
        self.db.add(txn)
        await self.db.flush()
        await self.db.refresh(txn)
        return self._serialize(txn, category_name)

    async def get_transaction(self, transaction_id: int, ctx: UserContext) -> dict:
        txn = await self._get_user_transaction(transaction_id, ctx)
        names = await self._category_names(ctx, {txn.category_id})
        return self._serialize(txn, names.get(txn.category_id))

    async def update_transaction(self, transaction_id: int, data: TransactionUpdate, ctx: UserContext) -> dict:
        txn = await self._get_user_transaction(transaction_id, ctx)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("account_id") is not None:
            await self._verify_account_ownership(update_data["account_id"], ctx)
        if update_data.get("category_id") is not None:
            await self._verify_category_ownership(update_data["category_id"], ctx)

        for key, value in update_data.items():
            if value is None and key not in ("category_id", "notes"):
                continue
            if key in ("transaction_type", "payment_method"):
                value = value.value
            setattr(txn, key, value)
        await self.db.flush()
        await self.db.refresh(txn)

        names = await self._category_names(ctx, {txn.category_id})
        return self._serialize(txn, names.get(txn.category_id))

    async def delete_transaction(self, transaction_id: int, ctx: UserContext) -> None:
        """Soft-delete a transaction."""
        txn = await self._get_user_transaction(transaction_id, ctx)
        txn.is_deleted = True
        await self.db.flush()

    async def _get_user_transaction(self, transaction_id: int, ctx: UserContext) -> Transaction:
        result = await self.db.execute(
            select(Transaction).where(
                Transaction.id == transaction_id,
                Transaction.user_id == ctx.user_id,
                Transaction.is_deleted.is_(False),
            )
        )
        txn = result.scalar_one_or_none()
        if not txn:
            raise NotFoundError("Transaction")
        return txn

    async def _verify_account_ownership(self, account_id: int, ctx: UserContext) -> Account:
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

    async def _verify_category_ownership(self, category_id: int, ctx: UserContext) -> Category:
        result = await self.db.execute(
            select(Category).where(
                Category.id == category_id,
                Category.user_id == ctx.user_id,
                Category.is_deleted.is_(False),
            )
        )
        category = result.scalar_one_or_none()
        if not category:
            raise NotFoundError("Category")
        return category

    async def _category_names(self, ctx: UserContext, category_ids: set) -> dict[int, str]:
        category_ids = {cid for cid in category_ids if cid is not None}
        if not category_ids:
            return {}
        result = await self.db.execute(
            select(Category.id, Category.name).where(
                Category.id.in_(category_ids),
                Category.user_id == ctx.user_id,
            )
        )
        return {row.id: row.name for row in result.all()}

    @staticmethod
    def _serialize(txn: Transaction, category_name: str | None) -> dict:
        return {
            "id": txn.id,
            "account_id": txn.account_id,
            "category_id": txn.category_id,
            "category_name": category_name,
            "amount": txn.amount,
            "description": txn.description,
            "date": txn.date,
            "transaction_type": txn.transaction_type,
            "payment_method": txn.payment_method,
            "notes": txn.notes,
            "created_at": txn.created_at,
            "updated_at": txn.updated_at,
        }
