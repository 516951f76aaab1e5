"""Category management service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.context import UserContext
from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.models.category import DEFAULT_CATEGORY_COLOR, Category
from expense_tracker.schemas.category import CategoryCreate, CategoryUpdate


class CategoryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_categories(self, ctx: UserContext) -> list[Category]:
        result = await self.db.execute(
            select(Category)
            .where(Category.user_id == ctx.user_id, Category.is_deleted.is_(False))
            .order_by(Category.name)
        )
        return list(result.scalars().all())

    async def create_category(self, data: CategoryCreate, ctx: UserContext) -> Category:
        category = Category(
            user_id=ctx.user_id,
            name=data.name,
            icon=data.icon,
            color=data.color or DEFAULT_CATEGORY_COLOR,
        )
        self.db.add(category)
        await self.db.flush()
        await self.db.refresh(category)
        return category

    async def update_category(self, category_id: int, data: CategoryUpdate, ctx: UserContext) -> Category:
        category = await self.get_category(category_id, ctx)
        update_data = data.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            if value is None and key != "icon":
                continue
            setattr(category, key, value)
        await self.db.flush()
        await self.db.refresh(category)
        return category

    async def delete_category(self, category_id: int, ctx: UserContext) -> None:
        """Remove a category. Ledger rows keep existing, uncategorized (FK SET NULL)."""
        category = await self.get_category(category_id, ctx)
        await self.db.delete(category)
        await self.db.flush()

    async def get_category(self, category_id: int, ctx: UserContext) -> Category:
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
