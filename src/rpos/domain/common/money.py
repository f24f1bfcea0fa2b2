from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
# NUMERIC(10,2)
MAX_AMOUNT = Decimal("99999999.99")


def to_amount(value: object) -> Decimal:
    """Parse a price-like value into a non-negative Decimal rounded to cents.

    Accepts ints, floats, Decimals and numeric strings. Raises ValueError for
    missing, non-numeric, non-finite, negative or out-of-range input.
    """
    if value is None or isinstance(value, bool):
        raise ValueError("amount is required")
    if isinstance(value, str) and not value.strip():
        raise ValueError("amount is required")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"amount {value!r} is not numeric") from exc

    if not amount.is_finite():
        raise ValueError(f"amount {value!r} is not numeric")
    if amount < 0:
        raise ValueError("amount must be >= 0")
    if amount > MAX_AMOUNT + CENTS:
        raise ValueError(f"amount must be <= {MAX_AMOUNT}")
    amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    if amount > MAX_AMOUNT:
        raise ValueError(f"amount must be <= {MAX_AMOUNT}")
    return amount


def line_total(price: Decimal, quantity: int) -> Decimal:
    return (price * quantity).quantize(CENTS, rounding=ROUND_HALF_UP)
