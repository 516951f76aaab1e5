"""Query description shared by every ledger aggregation.

A ``LedgerQuery`` is a frozen description of *which* ledger rows a report
covers. Aggregation functions in ``aggregation.py`` turn it into SQL; nothing
downstream mutates it, so one query can feed several sub-queries and every
one of them sees exactly the same filters.
"""

from dataclasses import dataclass, field
from datetime import date

from expense_tracker.models.expense import Expense
from expense_tracker.models.transaction import Transaction, TransactionType

LedgerEntity = type[Transaction] | type[Expense]


@dataclass(frozen=True)
class DateWindow:
    """Optional inclusive date bounds.

    both bounds  -> start <= date <= end
    start only   -> date >= start
    end only     -> date <= end
    neither      -> unbounded
    """

    start: date | None = None
    end: date | None = None

    @classmethod
    def for_year(cls, year: int) -> "DateWindow":
        return cls(start=date(year, 1, 1), end=date(year, 12, 31))

    @property
    def is_inverted(self) -> bool:
        return self.start is not None and self.end is not None and self.start > self.end

    def clauses(self, column) -> list:
        clauses = []
        if self.start is not None:
            clauses.append(column >= self.start)
        if self.end is not None:
            clauses.append(column <= self.end)
        return clauses


@dataclass(frozen=True)
class LedgerQuery:
    entity: LedgerEntity
    user_id: int
    window: DateWindow = field(default_factory=DateWindow)
    account_id: int | None = None
    transaction_type: TransactionType | None = None

    def __post_init__(self):
        if self.entity is Expense and (self.account_id is not None or self.transaction_type is not None):
            raise ValueError("expense ledger has no account or transaction type")

    @property
    def splits_by_type(self) -> bool:
        return self.entity is Transaction

    def where(self) -> list:
        """WHERE clauses for this query; soft-deleted rows are always excluded."""
        entity = self.entity
        clauses = [
            entity.user_id == self.user_id,
            entity.is_deleted.is_(False),
        ]
        clauses.extend(self.window.clauses(entity.date))
        if self.account_id is not None:
            clauses.append(entity.account_id == self.account_id)
        if self.transaction_type is not None:
            clauses.append(entity.transaction_type == self.transaction_type.value)
        return clauses
