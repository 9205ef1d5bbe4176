"""Tests for rental charge computation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from rental_api.services import pricing_service


def test_final_price_used_without_discount() -> None:
    assert pricing_service.compute_total(100, None, 3) == Decimal("300.00")


def test_discounted_price_wins() -> None:
    assert pricing_service.compute_total(100, 80, 3) == Decimal("240.00")


def test_zero_discount_falls_back_to_final_price() -> None:
    assert pricing_service.compute_total(Decimal("55.50"), Decimal("0"), 2) == Decimal(
        "111.00"
    )


def test_total_is_rounded_to_cents() -> None:
    total = pricing_service.compute_total(Decimal("33.335"), None, 1)
    assert total == Decimal("33.34")
    assert total.as_tuple().exponent == -2


@pytest.mark.parametrize("days", [0, -1])
def test_non_positive_day_count_rejected(days: int) -> None:
    with pytest.raises(ValueError):
        pricing_service.compute_total(100, 80, days)
