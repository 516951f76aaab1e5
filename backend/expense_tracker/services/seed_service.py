"""Default data for a freshly created user."""

from datetime import date
from decimal import Decimal

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.models.account import Account, AccountType
from expense_tracker.models.category import Category
from expense_tracker.services.account_lifecycle import DEFAULT_ACCOUNT_NAME

logger = structlog.get_logger()

# (name, icon, color), created in this order
DEFAULT_CATEGORIES: tuple[tuple[str, str, str], ...] = (
    ("Food & Dining", "🍔", "#ef4444"),
    ("Transportation", "🚗", "#3b82f6"),
    ("Shopping", "🛍️", "#8b5cf6"),
    ("Bills & Utilities", "💳", "#f59e0b"),
    ("Entertainment", "🎬", "#ec4899"),
    ("Healthcare", "🏥", "#10b981"),
    ("Education", "📚", "#6366f1"),
    ("Travel", "✈️", "#06b6d4"),
    ("Personal Care", "👤", "#f97316"),
    ("Gifts & Donations", "🎁", "#84cc16"),
)


class SeedService:
    """Best-effort seeding: a failed step is logged and never propagates.

    Each step runs in its own savepoint so a failure cannot poison the
    surrounding transaction that created the user.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def seed_new_user(self, user_id: int) -> None:
        await self.create_default_account(user_id)
        await self.create_default_categories(user_id)

    async def create_default_account(self, user_id: int) -> Account | None:
        try:
            async with self.db.begin_nested():
                account = Account(
                    user_id=user_id,
                    name=DEFAULT_ACCOUNT_NAME,
                    type=AccountType.CASH.value,
                    opening_balance=Decimal("0.00"),
                    opening_balance_date=date.today(),
                )
                self.db.add(account)
                await self.db.flush()
        except Exception:
            logger.exception("default_account_seed_failed", user_id=user_id)
            return None
        return account

    async def create_default_categories(self, user_id: int) -> list[Category]:
        created = []
        for name, icon, color in DEFAULT_CATEGORIES:
            try:
                async with self.db.begin_nested():
                    category = Category(user_id=user_id, name=name, icon=icon, color=color)
                    self.db.add(category)
                    await self.db.flush()
            except Exception:
                logger.exception("default_category_seed_failed", user_id=user_id, category=name)
                continue
            created.append(category)

        logger.info("default_categories_seeded", user_id=user_id, count=len(created))
        return created
