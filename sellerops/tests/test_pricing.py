"""
Tests for price arithmetic.
"""
import pytest

from sellerops.pipeline.pricing import (
    adjust_price,
    clamp_price,
    exceeds_discount_cap,
    format_money,
    offer_price,
)


FLOOR = 0.99


class TestAdjustPrice:
    """Tests for bulk adjustments."""

    def test_percentage_decrease(self):
        assert adjust_price(100.0, "percentage", -10, FLOOR) == 90.0

    def test_percentage_decrease_floors(self):
        assert adjust_price(0.50, "percentage", -10, FLOOR) == 0.99

    def test_percentage_increase(self):
        assert adjust_price(40.0, "percentage", 5, FLOOR) == 42.0

    def test_fixed(self):
        assert adjust_price(25.0, "fixed", -2.5, FLOOR) == 22.5
        assert adjust_price(2.0, "fixed", -5, FLOOR) == 0.99

    def test_rounds_to_cents(self):
        assert adjust_price(19.99, "percentage", -15, FLOOR) == 16.99


class TestOfferPrice:
    """Tests for watcher offer pricing."""

    def test_percentage(self):
        assert offer_price(100.0, "percentage", 15, FLOOR) == 85.0

    def test_fixed_clamped(self):
        assert offer_price(5.0, "fixed", 10, FLOOR) == 0.99


class TestPolicy:
    """Tests for the floor and cap helpers."""

    def test_clamp(self):
        assert clamp_price(0.0, FLOOR) == 0.99
        assert clamp_price(12.345, FLOOR) == pytest.approx(12.35, abs=0.011)

    def test_cap(self):
        assert exceeds_discount_cap(45, 40)
        assert not exceeds_discount_cap(40, 40)
        assert not exceeds_discount_cap(-10, 40)

    def test_format_money(self):
        assert format_money(12.5) == "$12.50"
        assert format_money(1234.4, 0) == "$1234"
