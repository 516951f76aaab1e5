"""Parameterized aggregations over a ``LedgerQuery``.

One function per report shape. Each issues a single grouped SELECT and converts
driver values to cents, so callers only ever see ``Decimal`` money.
"""

from decimal import Decimal

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.models.category import Category
from expense_tracker.models.transaction import TransactionType
from expense_tracker.schemas.stats import CategoryBreakdown, MonthlyTotal, PaymentMethodBreakdown
from expense_tracker.services.ledger_query import LedgerQuery
from expense_tracker.utils.money import to_money

UNCATEGORIZED = "Uncategorized"


async def sum_amount(db: AsyncSession, query: LedgerQuery) -> Decimal:
    """Total amount of the rows matched by ``query`` (0.00 when none)."""
    entity = query.entity
    result = await db.execute(
        select(func.coalesce(func.sum(entity.amount), 0)).where(*query.where())
    )
    return to_money(result.scalar())


async def sum_by_type(db: AsyncSession, query: LedgerQuery) -> dict[TransactionType, Decimal]:
    """Credit and debit totals in one pass; both keys are always present."""
    entity = query.entity
    result = await db.execute(
        select(entity.transaction_type, func.sum(entity.amount).label("total"))
        .where(*query.where())
        .group_by(entity.transaction_type)
    )
    totals = {kind: to_money(0) for kind in TransactionType}
    for row in result.all():
        totals[TransactionType(row.transaction_type)] = to_money(row.total)
    return totals


async def group_by_category(db: AsyncSession, query: LedgerQuery) -> list[CategoryBreakdown]:
    """Totals per category (NULL category included), split by type on the transaction ledger."""
    entity = query.entity
    columns = [
        Category.id.label("category_id"),
        Category.name.label("category_name"),
        Category.icon.label("category_icon"),
        Category.color.label("category_color"),
    ]
    if query.splits_by_type:
        columns.append(entity.transaction_type.label("transaction_type"))

    stmt = (
        select(
            *columns,
            func.sum(entity.amount).label("total"),
            func.count(entity.id).label("count"),
        )
        .select_from(entity)
        .outerjoin(Category, entity.category_id == Category.id)
        .where(*query.where())
        .group_by(*columns)
        .order_by(Category.name.nulls_last(), *columns[4:])
    )
    result = await db.execute(stmt)

    entries = []
    for row in result.all():
        row_map = row._mapping
        entries.append(
            CategoryBreakdown(
                category_id=row.category_id,
                category_name=row.category_name or UNCATEGORIZED,
                category_icon=row.category_icon,
                category_color=row.category_color,
                transaction_type=row_map.get("transaction_type"),
                total=to_money(row.total),
                count=row.count,
            )
        )
    return entries


async def group_by_payment_method(db: AsyncSession, query: LedgerQuery) -> list[PaymentMethodBreakdown]:
    entity = query.entity
    columns = [entity.payment_method.label("payment_method")]
    if query.splits_by_type:
        columns.append(entity.transaction_type.label("transaction_type"))

    stmt = (
        select(
            *columns,
            func.sum(entity.amount).label("total"),
            func.count(entity.id).label("count"),
        )
        .where(*query.where())
        .group_by(*columns)
        .order_by(*columns)
    )
    result = await db.execute(stmt)

    return [
        PaymentMethodBreakdown(
            payment_method=row.payment_method,
            transaction_type=row._mapping.get("transaction_type"),
            total=to_money(row.total),
            count=row.count,
        )
        for row in result.all()
    ]


async def monthly_totals(db: AsyncSession, query: LedgerQuery) -> list[MonthlyTotal]:
    """Totals per calendar month, ascending; months without rows are absent."""
    entity = query.entity
    month_col = extract("month", entity.date).label("month")

    stmt = (
        select(
            month_col,
            func.sum(entity.amount).label("total"),
            func.count(entity.id).label("count"),
        )
        .where(*query.where())
        .group_by(month_col)
        .order_by(month_col)
    )
    result = await db.execute(stmt)

    return [
        MonthlyTotal(month=int(row.month), total=to_money(row.total), count=row.count)
        for row in result.all()
    ]
