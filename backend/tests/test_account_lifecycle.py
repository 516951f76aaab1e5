"""Account deletion rules."""

import pytest

from expense_tracker.core.exceptions import ConflictError, NotFoundError
from expense_tracker.services.account_lifecycle import AccountLifecycleGuard
from expense_tracker.services.account_service import AccountService


@pytest.mark.asyncio
async def test_empty_non_default_account_may_be_deleted(db, user, ctx, make_account):
    account = await make_account(user, name="Savings")

    verdict = await AccountLifecycleGuard(db).can_delete(account, ctx)

    assert verdict.allowed
    assert verdict.reason is None


@pytest.mark.asyncio
async def test_default_cash_account_is_protected(db, user, ctx, make_account):
    cash = await make_account(user, name="Cash", type="cash")

    verdict = await AccountLifecycleGuard(db).can_delete(cash, ctx)

    assert not verdict.allowed
    assert verdict.reason == "Cannot delete the default Cash account"


@pytest.mark.asyncio
async def test_later_cash_account_is_not_the_default(db, user, ctx, make_account):
    await make_account(user, name="Cash", type="cash")
    second = await make_account(user, name="cash", type="cash")

    verdict = await AccountLifecycleGuard(db).can_delete(second, ctx)

    assert verdict.allowed


@pytest.mark.asyncio
async def test_renamed_default_account_loses_protection(db, user, ctx, make_account):
    wallet = await make_account(user, name="Wallet", type="cash")

    verdict = await AccountLifecycleGuard(db).can_delete(wallet, ctx)

    assert verdict.allowed


@pytest.mark.asyncio
async def test_account_with_transactions_is_protected(db, user, ctx, make_account, make_transaction):
    await make_account(user, name="Cash", type="cash")
    bank = await make_account(user, name="Bank")
    await make_transaction(bank, "10.00")
    await make_transaction(bank, "20.00", "credit")
    await make_transaction(bank, "30.00", is_deleted=True)

    verdict = await AccountLifecycleGuard(db).can_delete(bank, ctx)

    assert not verdict.allowed
    assert verdict.reason == (
        "Cannot delete account with 2 transaction(s). Please delete or move the transactions first."
    )


@pytest.mark.asyncio
async def test_only_soft_deleted_transactions_do_not_block(db, user, ctx, make_account, make_transaction):
    bank = await make_account(user, name="Bank")
    await make_transaction(bank, "30.00", is_deleted=True)

    assert await AccountLifecycleGuard(db).count_transactions(bank) == 0
    assert (await AccountLifecycleGuard(db).can_delete(bank, ctx)).allowed


@pytest.mark.asyncio
async def test_delete_account_refuses_with_conflict(db, user, ctx, make_account):
    cash = await make_account(user, name="Cash", type="cash")

    with pytest.raises(ConflictError) as exc_info:
        await AccountService(db).delete_account(cash.id, ctx)

    assert exc_info.value.status_code == 409
    assert cash.is_deleted is False


@pytest.mark.asyncio
async def test_delete_account_soft_deletes(db, user, ctx, make_account):
    await make_account(user, name="Cash", type="cash")
    bank = await make_account(user, name="Bank")

    await AccountService(db).delete_account(bank.id, ctx)

    assert bank.is_deleted is True
    assert [a.name for a in await AccountService(db).list_accounts(ctx)] == ["Cash"]


@pytest.mark.asyncio
async def test_delete_other_users_account_is_not_found(db, user, other_ctx, make_account):
    bank = await make_account(user, name="Bank")

    with pytest.raises(NotFoundError):
        await AccountService(db).delete_account(bank.id, other_ctx)


@pytest.mark.asyncio
async def test_default_rule_wins_over_transaction_count(db, user, ctx, make_account, make_transaction):
    cash = await make_account(user, name="Cash", type="cash")
    await make_transaction(cash, "5.00")

    verdict = await AccountLifecycleGuard(db).can_delete(cash, ctx)

    assert not verdict.allowed
    assert verdict.reason == "Cannot delete the default Cash account"
