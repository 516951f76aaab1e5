"""Local user records for identities issued by the external auth provider."""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.models.user import User
from expense_tracker.services.seed_service import SeedService

logger = structlog.get_logger()


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_external_id(self, external_id: str) -> User | None:
        result = await self.db.execute(
            select(User).where(
                User.external_id == external_id,
                User.is_active.is_(True),
                User.is_deleted.is_(False),
            )
        )
        return result.scalar_one_or_none()

    async def create_user(self, external_id: str, email: str | None = None, full_name: str | None = None) -> User:
        """Create the user, then seed its default account and categories."""
        user = User(external_id=external_id, email=email, full_name=full_name)
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        logger.info("user_created", user_id=user.id, email=email)

        await SeedService(self.db).seed_new_user(user.id)
        return user

    async def get_or_provision(self, external_id: str, email: str | None = None, full_name: str | None = None) -> User:
        """Return the local user for a token subject, creating it on first sight."""
        user = await self.get_by_external_id(external_id)
        if user is None:
            return await self.create_user(external_id, email, full_name)

        changed = False
        if email and user.email != email:
            user.email = email
            changed = True
        if full_name and user.full_name != full_name:
            user.full_name = full_name
            changed = True
        if changed:
            await self.db.flush()
        return user
