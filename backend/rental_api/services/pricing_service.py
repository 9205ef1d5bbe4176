"""Rental charge computation."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

MONEY_PLACES = Decimal("0.01")


def _to_money(value: Decimal | float | int | str) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def daily_rate(
    final_price: Decimal | float | int | str,
    discounted_price: Decimal | float | int | str | None,
) -> Decimal:
    """The discounted price wins whenever it is set and non-zero."""
    if discounted_price is not None and Decimal(str(discounted_price)) != 0:
        return Decimal(str(discounted_price))
    return Decimal(str(final_price))


def compute_total(
    final_price: Decimal | float | int | str,
    discounted_price: Decimal | float | int | str | None,
    days: int,
) -> Decimal:
    """Total charge for ``days`` rental days, rounded to cents."""
    if days <= 0:
        raise ValueError("Rental day count must be positive")
    return _to_money(daily_rate(final_price, discounted_price) * days)
