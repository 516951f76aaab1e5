"""Shared API dependencies."""

from expense_tracker.core.database import get_db
from expense_tracker.core.security import get_current_user, get_user_context

__all__ = ["get_db", "get_current_user", "get_user_context"]
