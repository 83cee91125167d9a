# backend/tests/utils/test_fx_conversion.py
"""Tests for the rate orientation helpers and default session rates."""

from decimal import Decimal

import pytest

from app.utils.fx_conversion import (
    convert_from_base,
    convert_to_base,
    default_exchange_rate,
    deposit_rate_to_base_rate,
)

USD_TO_CAD = Decimal("1.36")
EUR_TO_CAD = Decimal("1.47")
USD_TO_EUR = Decimal("0.92")


class TestOrientation:

    def test_deposit_rate_is_inverted(self):
        assert deposit_rate_to_base_rate(Decimal("1.25")) == Decimal("0.8")

    def test_zero_deposit_rate(self):
        with pytest.raises(ValueError):
            deposit_rate_to_base_rate(Decimal("0"))

    def test_convert_to_base(self):
        assert convert_to_base(Decimal("100"), Decimal("1.35")) == Decimal("135")

    def test_convert_from_base(self):
        assert convert_from_base(Decimal("135"), Decimal("1.35")) == Decimal("100")

    def test_convert_from_base_zero_rate(self):
        with pytest.raises(ValueError):
            convert_from_base(Decimal("1"), Decimal("0"))


class TestDefaultExchangeRate:

    def _rate(self, session_currency: str, base_currency: str) -> Decimal:
        return default_exchange_rate(session_currency, base_currency, USD_TO_CAD, EUR_TO_CAD, USD_TO_EUR)

    def test_same_currency(self):
        assert self._rate("USD", "USD") == Decimal("1")

    @pytest.mark.parametrize("pair, expected", [
        (("USD", "CAD"), USD_TO_CAD),
        (("EUR", "CAD"), EUR_TO_CAD),
        (("USD", "EUR"), USD_TO_EUR),
    ])
    def test_configured_pairs(self, pair, expected):
        assert self._rate(*pair) == expected

    def test_reverse_pair_is_inverse(self):
        assert self._rate("CAD", "USD") == Decimal("1") / USD_TO_CAD

    def test_unknown_pair(self):
        assert self._rate("GBP", "CAD") == Decimal("1")

    def test_unusable_configured_rate_falls_back(self):
        rate = default_exchange_rate("CAD", "USD", Decimal("0"), EUR_TO_CAD, USD_TO_EUR)
        assert rate == Decimal("0.73")
