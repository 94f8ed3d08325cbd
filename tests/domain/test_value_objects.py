"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_defaults_to_kuwaiti_dinar(self):
        m = Money(Decimal("10.500"))
        assert m.amount == Decimal("10.500")
        assert m.currency == "KWD"

    def test_of_factory_from_string(self):
        assert Money.of("25.990").amount == Decimal("25.990")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("1.500") == Money.of("11.500")

    def test_mixed_currencies_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine KWD with USD"):
            Money.of("1") + Money.of("1", "USD")

    def test_multiply_by_int(self):
        assert Money.of("10.000") * 2 == Money.of("20.000")

    def test_multiply_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("10") * 1.5

    def test_kwd_displays_three_decimals(self):
        assert str(Money.of("21.5")) == "21.500 KD"

    def test_usd_displays_two_decimals(self):
        assert str(Money.of("69.875", "USD")) == "$69.88"

    def test_convert_rounds_to_target_minor_units(self):
        usd = Money.of("21.500").convert(Decimal("3.2537"), "USD")
        assert usd == Money(Decimal("69.95"), "USD")

    def test_format_plain(self):
        assert Money.of("7", "USD").format_plain() == "7.00"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)  # type: ignore[arg-type]
