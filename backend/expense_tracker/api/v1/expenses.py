"""Expense ledger API routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.api.deps import get_db, get_user_context
from expense_tracker.config import settings
from expense_tracker.core.context import UserContext
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate, PaginatedExpenses
from expense_tracker.schemas.stats import ExpenseStats, MonthlyTotal
from expense_tracker.services.expense_service import ExpenseService
from expense_tracker.services.stats_service import StatsService

router = APIRouter()


@router.get("", response_model=PaginatedExpenses)
async def list_expenses(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    start_date: date | None = None,
    end_date: date | None = None,
    category_id: int | None = None,
    search: str | None = None,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = ExpenseService(db)
    return await service.list_expenses(
        ctx,
        page=page,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        category_id=category_id,
        search=search,
    )


@router.post("", response_model=ExpenseResponse, status_code=201)
async def create_expense(
    data: ExpenseCreate,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = ExpenseService(db)
    return await service.create_expense(data, ctx)


@router.get("/stats", response_model=ExpenseStats)
async def get_expense_stats(
    start_date: date | None = None,
    end_date: date | None = None,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = StatsService(db)
    return await service.compute_expense_stats(ctx, start_date, end_date)


@router.get("/monthly", response_model=list[MonthlyTotal])
async def get_expense_monthly(
    year: int | None = Query(None, ge=1900, le=9999),
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = StatsService(db)
    return await service.compute_expense_monthly_breakdown(ctx, year)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = ExpenseService(db)
    return await service.get_expense(expense_id, ctx)


@router.patch("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    data: ExpenseUpdate,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = ExpenseService(db)
    return await service.update_expense(expense_id, data, ctx)


@router.delete("/{expense_id}", status_code=204)
async def delete_expense(
    expense_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """Soft-delete an expense."""
    service = ExpenseService(db)
    await service.delete_expense(expense_id, ctx)
