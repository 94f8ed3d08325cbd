"""Unit tests for cart snapshots."""

import pytest

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.cart import ShippingAddress, subtotal
from checkout.domain.model.value_objects import Money
from tests.builders import make_line


class TestCartLine:

    def test_effective_price_without_discount(self):
        assert make_line(price="10.000").effective_price == Money.of("10.000")

    def test_effective_price_with_discount(self):
        line = make_line(price="10.000", discounted_price="7.500")
        assert line.effective_price == Money.of("7.500")

    def test_line_total(self):
        assert make_line(qty=3, price="2.250").line_total == Money.of("6.750")

    def test_key_for_plain_product(self):
        assert make_line(product_id="p1").key == "p1-null-null"

    def test_key_for_variant(self):
        line = make_line(product_id="p1", variant_id="v2", size="M", has_variants=True)
        assert line.key == "p1-v2-M"


class TestSubtotal:

    def test_sums_effective_prices(self):
        lines = [
            make_line(qty=2, price="10.000"),
            make_line(product_id="p2", qty=1, price="5.000", discounted_price="4.000"),
        ]
        assert subtotal(lines) == Money.of("24.000")

    def test_empty(self):
        assert subtotal([]) == Money.zero()


class TestShippingAddress:

    def test_incomplete_address_rejected(self):
        with pytest.raises(ValidationError, match="missing street, house"):
            ShippingAddress(governorate="Capital", city="Kuwait City", block="1", street="", house=" ")

    def test_from_dict_ignores_extra_keys(self):
        address = ShippingAddress.from_dict(
            {"_id": "a1", "governorate": "Capital", "city": "Shuwaikh",
             "block": "2", "street": "5", "house": "11"}
        )
        assert address.to_dict()["city"] == "Shuwaikh"
