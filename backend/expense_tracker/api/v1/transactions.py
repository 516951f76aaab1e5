"""Transaction API routes: ledger CRUD, balances and statistics."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.api.deps import get_db, get_user_context
from expense_tracker.config import settings
from expense_tracker.core.context import UserContext
from expense_tracker.models.transaction import TransactionType
from expense_tracker.schemas.account import AccountBalance
from expense_tracker.schemas.stats import MonthlyTotal, TransactionStats
from expense_tracker.schemas.transaction import (
    PaginatedTransactions,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from expense_tracker.services.balance_service import BalanceService
from expense_tracker.services.stats_service import StatsService
from expense_tracker.services.transaction_service import TransactionService

router = APIRouter()


@router.get("", response_model=PaginatedTransactions)
async def list_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    start_date: date | None = None,
    end_date: date | None = None,
    account_id: int | None = None,
    category_id: int | None = None,
    search: str | None = None,
    transaction_type: TransactionType | None = None,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """List transactions with pagination and filters, newest first."""
    service = TransactionService(db)
    return await service.list_transactions(
        ctx,
        page=page,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        account_id=account_id,
        category_id=category_id,
        search=search,
        transaction_type=transaction_type,
    )


@router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    data: TransactionCreate,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = TransactionService(db)
    return await service.create_transaction(data, ctx)


@router.get("/balances", response_model=list[AccountBalance])
async def get_all_balances(
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """Balances of every active account, oldest account first."""
    service = BalanceService(db)
    return await service.compute_all_balances(ctx)


@router.get("/balance/{account_id}", response_model=AccountBalance)
async def get_balance(
    account_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = BalanceService(db)
    return await service.compute_balance(ctx, account_id)


@router.get("/stats", response_model=TransactionStats)
async def get_stats(
    start_date: date | None = None,
    end_date: date | None = None,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """Credit/debit totals plus category and payment-method breakdowns.

    Both bounds are inclusive; either may be omitted.
    """
    service = StatsService(db)
    return await service.compute_stats(ctx, start_date, end_date)


@router.get("/monthly", response_model=list[MonthlyTotal])
async def get_monthly_breakdown(
    year: int | None = Query(None, ge=1900, le=9999),
    transaction_type: TransactionType = TransactionType.DEBIT,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """Per-month totals for a year (current year by default)."""
    service = StatsService(db)
    return await service.compute_monthly_breakdown(ctx, year, transaction_type)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = TransactionService(db)
    return await service.get_transaction(transaction_id, ctx)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: int,
    data: TransactionUpdate,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = TransactionService(db)
    return await service.update_transaction(transaction_id, data, ctx)


@router.delete("/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """Soft-delete a transaction."""
    service = TransactionService(db)
    await service.delete_transaction(transaction_id, ctx)
