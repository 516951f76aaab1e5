"""Fixed-point money helpers."""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Coerce a driver value (Decimal, int, float, str or None) to cents.

    SQLite hands SUM() back as a float; going through ``str`` keeps the
    shortest repr so the quantize step lands on the intended cent.
    """
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
