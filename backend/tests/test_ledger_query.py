"""LedgerQuery / DateWindow behaviour."""

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.models import Expense, Transaction, TransactionType
from expense_tracker.services.ledger_query import DateWindow, LedgerQuery
from expense_tracker.utils.money import to_money


def test_window_bounds_become_inclusive_clauses():
    window = DateWindow(start=date(2024, 1, 1), end=date(2024, 1, 31))
    clauses = [str(c) for c in window.clauses(Transaction.date)]
    assert len(clauses) == 2
    assert clauses[0].startswith("transactions.date >=")
    assert clauses[1].startswith("transactions.date <=")


def test_open_window_has_no_clauses():
    assert DateWindow().clauses(Transaction.date) == []


def test_inverted_window():
    assert DateWindow(start=date(2024, 2, 1), end=date(2024, 1, 1)).is_inverted
    assert not DateWindow(start=date(2024, 1, 1), end=date(2024, 1, 1)).is_inverted
    assert not DateWindow(start=date(2024, 2, 1)).is_inverted


def test_for_year_covers_the_calendar_year():
    assert DateWindow.for_year(2024) == DateWindow(start=date(2024, 1, 1), end=date(2024, 12, 31))


def test_query_is_immutable():
    query = LedgerQuery(entity=Transaction, user_id=1)
    with pytest.raises(FrozenInstanceError):
        query.user_id = 2


def test_query_always_scopes_user_and_soft_delete():
    where = [str(c) for c in LedgerQuery(entity=Transaction, user_id=1).where()]
    assert len(where) == 2
    assert where[0].startswith("transactions.user_id =")
    assert where[1].startswith("transactions.is_deleted IS")


def test_query_adds_account_and_type_filters():
    query = LedgerQuery(
        entity=Transaction,
        user_id=1,
        account_id=7,
        transaction_type=TransactionType.CREDIT,
        window=DateWindow(start=date(2024, 1, 1)),
    )
    assert len(query.where()) == 5
    assert query.splits_by_type


def test_expense_query_rejects_transaction_only_filters():
    assert not LedgerQuery(entity=Expense, user_id=1).splits_by_type
    with pytest.raises(ValueError):
        LedgerQuery(entity=Expense, user_id=1, account_id=3)
    with pytest.raises(ValueError):
        LedgerQuery(entity=Expense, user_id=1, transaction_type=TransactionType.DEBIT)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, Decimal("0.00")),
        (0, Decimal("0.00")),
        (12.5, Decimal("12.50")),
        ("1.005", Decimal("1.01")),
        (Decimal("7"), Decimal("7.00")),
    ],
)
def test_to_money(raw, expected):
    assert to_money(raw) == expected
    assert to_money(raw).as_tuple().exponent == -2
