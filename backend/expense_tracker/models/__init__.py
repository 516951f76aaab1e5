"""SQLAlchemy models."""

from expense_tracker.models.account import Account, AccountType
from expense_tracker.models.base import Base
from expense_tracker.models.category import Category
from expense_tracker.models.expense import Expense
from expense_tracker.models.transaction import PaymentMethod, Transaction, TransactionType
from expense_tracker.models.user import User

__all__ = [
    "Base",
    "User",
    "Account",
    "AccountType",
    "Transaction",
    "TransactionType",
    "PaymentMethod",
    "Category",
    "Expense",
]
