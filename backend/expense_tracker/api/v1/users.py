"""User API routes."""

from fastapi import APIRouter, Depends

from expense_tracker.api.deps import get_current_user
from expense_tracker.models.user import User
from expense_tracker.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Current user profile (provisioned and seeded on first call)."""
    return current_user
