"""Balance calculator tests."""

from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.services.balance_service import BalanceService


@pytest.mark.asyncio
async def test_balance_is_opening_plus_credits_minus_debits(db, user, ctx, make_account, make_transaction):
    account = await make_account(user, opening_balance="1000.00", opening_balance_date=date(2024, 1, 1))
    await make_transaction(account, "500.00", "credit")
    await make_transaction(account, "200.00", "debit")
    await make_transaction(account, "50.00", "debit", is_deleted=True)

    balance = await BalanceService(db).compute_balance(ctx, account.id)

    assert balance.account_id == account.id
    assert balance.opening_balance == Decimal("1000.00")
    assert balance.total_credit == Decimal("500.00")
    assert balance.total_debit == Decimal("200.00")
    assert balance.balance == Decimal("1300.00")


@pytest.mark.asyncio
async def test_balance_without_transactions_is_opening_balance(db, user, ctx, make_account):
    account = await make_account(user, opening_balance="42.50")

    balance = await BalanceService(db).compute_balance(ctx, account.id)

    assert balance.total_credit == Decimal("0.00")
    assert balance.total_debit == Decimal("0.00")
    assert balance.balance == Decimal("42.50")


@pytest.mark.asyncio
async def test_balance_ignores_transactions_before_opening_date(db, user, ctx, make_account, make_transaction):
    account = await make_account(user, opening_balance="100.00", opening_balance_date=date(2024, 3, 1))
    await make_transaction(account, "30.00", "debit", on=date(2024, 2, 28))
    await make_transaction(account, "10.00", "debit", on=date(2024, 3, 1))

    balance = await BalanceService(db).compute_balance(ctx, account.id)

    assert balance.total_debit == Decimal("10.00")
    assert balance.balance == Decimal("90.00")


@pytest.mark.asyncio
async def test_balance_may_go_negative(db, user, ctx, make_account, make_transaction):
    account = await make_account(user, opening_balance="10.00")
    await make_transaction(account, "25.00", "debit")

    balance = await BalanceService(db).compute_balance(ctx, account.id)

    assert balance.balance == Decimal("-15.00")


@pytest.mark.asyncio
async def test_balance_of_other_users_account_is_not_found(
    db, user, other_user, other_ctx, make_account
):
    account = await make_account(user)

    with pytest.raises(NotFoundError):
        await BalanceService(db).compute_balance(other_ctx, account.id)


@pytest.mark.asyncio
async def test_balance_of_deleted_account_is_not_found(db, user, ctx, make_account):
    account = await make_account(user)
    account.is_deleted = True
    await db.flush()

    with pytest.raises(NotFoundError):
        await BalanceService(db).compute_balance(ctx, account.id)


@pytest.mark.asyncio
async def test_all_balances_lists_active_accounts_oldest_first(db, user, ctx, make_account, make_transaction):
    first = await make_account(user, name="Cash", type="cash", opening_balance="5.00")
    second = await make_account(user, name="Bank", opening_balance="100.00")
    deleted = await make_account(user, name="Old")
    deleted.is_deleted = True
    await make_transaction(second, "20.00", "credit")
    await db.flush()

    balances = await BalanceService(db).compute_all_balances(ctx)

    assert [b.account_id for b in balances] == [first.id, second.id]
    assert balances[1].balance == Decimal("120.00")


@pytest.mark.asyncio
async def test_all_balances_is_empty_without_accounts(db, user, ctx):
    assert await BalanceService(db).compute_all_balances(ctx) == []


@pytest.mark.asyncio
async def test_all_balances_degrades_failed_account_to_opening_balance(
    db, user, ctx, make_account, make_transaction, monkeypatch
):
    healthy = await make_account(user, name="Bank", opening_balance="100.00")
    broken = await make_account(user, name="Card", type="card", opening_balance="75.00")
    await make_transaction(healthy, "25.00", "credit")
    await make_transaction(broken, "10.00", "debit")

    original = BalanceService._balance_for

    async def flaky(self, account):
        if account.id == broken.id:
            raise RuntimeError("boom")
        return await original(self, account)

    monkeypatch.setattr(BalanceService, "_balance_for", flaky)

    balances = await BalanceService(db).compute_all_balances(ctx)

    by_id = {b.account_id: b for b in balances}
    assert by_id[healthy.id].balance == Decimal("125.00")
    assert by_id[broken.id].balance == Decimal("75.00")
    assert by_id[broken.id].total_debit == Decimal("0.00")
