"""Category API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.api.deps import get_db, get_user_context
from expense_tracker.core.context import UserContext
from expense_tracker.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from expense_tracker.services.category_service import CategoryService

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = CategoryService(db)
    return await service.list_categories(ctx)


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    data: CategoryCreate,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = CategoryService(db)
    return await service.create_category(data, ctx)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    service = CategoryService(db)
    return await service.update_category(category_id, data, ctx)


@router.delete("/{category_id}", status_code=204)
async def delete_category(
    category_id: int,
    ctx: UserContext = Depends(get_user_context),
    db: AsyncSession = Depends(get_db),
):
    """Delete a category; its transactions and expenses become uncategorized."""
    service = CategoryService(db)
    await service.delete_category(category_id, ctx)
