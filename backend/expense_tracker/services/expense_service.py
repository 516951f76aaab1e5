"""Expense ledger service (debit-only bookkeeping)."""

from datetime import date
from math import ceil

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.context import UserContext
from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.models.category import Category
from expense_tracker.models.expense import Expense
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from expense_tracker.services.ledger_query import DateWindow


class ExpenseService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_expenses(
        self,
        ctx: UserContext,
        page: int = 1,
        limit: int = 10,
        start_date: date | None = None,
        end_date: date | None = None,
        category_id: int | None = None,
        search: str | None = None,
    ) -> dict:
        query = select(Expense).where(
            Expense.user_id == ctx.user_id,
            Expense.is_deleted.is_(False),
            *DateWindow(start=start_date, end=end_date).clauses(Expense.date),
        )
        if category_id:
            query = query.where(Expense.category_id == category_id)
        if search:
            query = query.where(Expense.description.ilike(f"%{search}%"))

        total = (await self.db.execute(select(func.count()).select_from(query.subquery()))).scalar() or 0

        query = (
            query.order_by(Expense.date.desc(), Expense.created_at.desc(), Expense.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return {
            "data": [ExpenseResponse.model_validate(e) for e in result.scalars().all()],
            "meta": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": ceil(total / limit) if limit else 0,
            },
        }

    async def create_expense(self, data: ExpenseCreate, ctx: UserContext) -> Expense:
        if data.category_id is not None:
            await self._verify_category_ownership(data.category_id, ctx)
        expense = Expense(
            user_id=ctx.user_id,
            category_id=data.category_id,
            amount=data.amount,
            description=data.description,
            date=data.date,
            payment_method=data.payment_method.value,
            notes=data.notes,
        )
        self.db.add(expense)
        await self.db.flush()
        await self.db.refresh(expense)
        return expense

    async def get_expense(self, expense_id: int, ctx: UserContext) -> Expense:
        result = await self.db.execute(
            select(Expense).where(
                Expense.id == expense_id,
                Expense.user_id == ctx.user_id,
                Expense.is_deleted.is_(False),
            )
        )
        expense = result.scalar_one_or_none()
        if not expense:
            raise NotFoundError("Expense")
        return expense

    async def update_expense(self, expense_id: int, data: ExpenseUpdate, ctx: UserContext) -> Expense:
        expense = await self.get_expense(expense_id, ctx)
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("category_id") is not None:
            await self._verify_category_ownership(update_data["category_id"], ctx)
        for key, value in update_data.items():
            if value is None and key not in ("category_id", "notes"):
                continue
            if key == "payment_method":
                value = value.value
            setattr(expense, key, value)
        await self.db.flush()
        await self.db.refresh(expense)
        return expense

    async def delete_expense(self, expense_id: int, ctx: UserContext) -> None:
        """Soft-delete an expense."""
        expense = await self.get_expense(expense_id, ctx)
        expense.is_deleted = True
        await self.db.flush()

    async def _verify_category_ownership(self, category_id: int, ctx: UserContext) -> None:
        result = await self.db.execute(
            select(Category.id).where(
                Category.id == category_id,
                Category.user_id == ctx.user_id,
                Category.is_deleted.is_(False),
            )
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Category")
