# backend/tests/utils/test_decimal_utils.py
"""Tests for Decimal coercion and formatting helpers."""

from decimal import Decimal

import pytest

from app.utils.decimal_utils import format_amount, safe_divide, to_decimal


@pytest.mark.parametrize("value, expected", [
    (None, Decimal("0")),
    (3, Decimal("3")),
    (0.1, Decimal("0.1")),
    ("2.50", Decimal("2.50")),
    (Decimal("7"), Decimal("7")),
])
def test_to_decimal(value, expected):
    assert to_decimal(value) == expected


def test_safe_divide():
    assert safe_divide(Decimal("10"), Decimal("4")) == Decimal("2.5")
    assert safe_divide(Decimal("10"), Decimal("0")) == Decimal("0")
    assert safe_divide(Decimal("10"), Decimal("-2")) == Decimal("0")


@pytest.mark.parametrize("value, expected", [
    (Decimal("2.50000000"), "2.5"),
    (Decimal("100.00"), "100"),
    (Decimal("0.00010000"), "0.0001"),
    (Decimal("1E+2"), "100"),
])
def test_format_amount(value, expected):
    assert format_amount(value) == expected
