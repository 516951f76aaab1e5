"""Account management API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.api.deps import get_db, get_user_context
from expense_tracker.core.context import UserContext
from expense_tracker.schemas.account import AccountBalance, AccountCreate, AccountResponse, AccountUpdate
from expense_tracker.services.account_service import AccountService
from expense_tracker.services.balance_service import BalanceService

router = APIRouter()


@router.get("", response_model=list[AccountResponse])
async def list_accounts(
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """List active accounts, oldest first."""
    service = AccountService(db)
    return await service.list_accounts(ctx)


@router.post("", response_model=AccountResponse, status_code=201)
async def create_account(
    data: AccountCreate,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = AccountService(db)
    return await service.create_account(data, ctx)


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = AccountService(db)
    return await service.get_account(account_id, ctx)


@router.get("/{account_id}/balance", response_model=AccountBalance)
async def get_account_balance(
    account_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """Same as GET /transactions/balance/{account_id}."""
    service = BalanceService(db)
    return await service.compute_balance(ctx, account_id)


@router.patch("/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: int,
    data: AccountUpdate,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = AccountService(db)
    return await service.update_account(account_id, data, ctx)


@router.delete("/{account_id}", status_code=204)
async def delete_account(
    account_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """Soft-delete an account. 409 for the default account or one with transactions."""
    service = AccountService(db)
    await service.delete_account(account_id, ctx)
