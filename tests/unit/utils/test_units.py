"""Unit tests for fixed-point amount conversions."""

from decimal import Decimal

import pytest

from src.funkybit_sdk.utils.units import (
    bigint_to_scaled_decimal,
    calculate_notional,
    from_fundamental_units,
    parse_units,
    scaled_decimal_to_bigint,
)


class TestBigintToScaledDecimal:
    """Test integer to decimal conversion."""

    def test_scales_by_decimals(self):
        """Should divide by 10^decimals."""
        assert bigint_to_scaled_decimal(150_000_000, 8) == Decimal("1.5")

    def test_zero_decimals(self):
        """Should return the integer unchanged with 0 decimals."""
        assert bigint_to_scaled_decimal(42, 0) == Decimal("42")

    def test_is_exact_for_large_amounts(self):
        """Should not lose precision on 18-decimal amounts."""
        amount = 123_456_789_012_345_678_901_234_567_890

        result = bigint_to_scaled_decimal(amount, 18)

        assert result == Decimal("123456789012.345678901234567890")


class TestScaledDecimalToBigint:
    """Test decimal to integer conversion."""

    def test_scales_by_decimals(self):
        """Should multiply by 10^decimals."""
        assert scaled_decimal_to_bigint(Decimal("1.5"), 8) == 150_000_000

    def test_truncates_by_default(self):
        """Should drop digits beyond the precision."""
        assert scaled_decimal_to_bigint(Decimal("1.2345679"), 6) == 1_234_567

    def test_truncates_toward_zero_for_negative_values(self):
        """Should truncate toward zero, not floor."""
        assert scaled_decimal_to_bigint(Decimal("-1.2345679"), 6) == -1_234_567

    def test_rounds_half_up_when_requested(self):
        """Should round half up when round=True."""
        assert scaled_decimal_to_bigint(Decimal("1.2345675"), 6, round=True) == 1_234_568
        assert scaled_decimal_to_bigint(Decimal("1.2345674"), 6, round=True) == 1_234_567

    def test_round_trips_with_bigint_to_scaled_decimal(self):
        """Should recover the original integer."""
        amount = 987_654_321_987_654_321_987

        assert scaled_decimal_to_bigint(bigint_to_scaled_decimal(amount, 18), 18) == amount


class TestCalculateNotional:
    """Test notional calculation."""

    def test_price_times_size(self):
        """Should compute price x size in quote units."""
        # 100 USDC x 2 BTC
        assert calculate_notional(100_000_000, 200_000_000, 8) == 200_000_000

    def test_notional_is_floored(self):
        """Should floor fractional quote units."""
        # 3 USDC x 0.00000001 BTC = 0.00000003 USDC
        assert calculate_notional(3_000_000, 1, 8) == 0


class TestParseUnits:
    """Test parsing decimal strings into fundamental units."""

    def test_parses_decimal_string(self):
        """Should scale a decimal string."""
        assert parse_units("100.25", 6) == 100_250_000

    def test_parses_decimal_value(self):
        """Should scale a Decimal."""
        assert parse_units(Decimal("0.5"), 8) == 50_000_000

    def test_rounds_excess_precision_half_up(self):
        """Should round digits beyond the precision half up."""
        assert parse_units("0.0000005", 6) == 1
        assert parse_units("0.0000004", 6) == 0

    def test_rejects_invalid_input(self):
        """Should reject strings that are not numbers."""
        with pytest.raises(ValueError, match="can't be parsed"):
            parse_units("abc", 6)

    def test_rejects_infinity(self):
        """Should reject non-finite numbers."""
        with pytest.raises(ValueError, match="not a finite number"):
            parse_units("Infinity", 6)


class TestFromFundamentalUnits:
    """Test formatting fundamental units."""

    def test_formats_with_decimal_point(self):
        """Should insert the decimal point."""
        assert from_fundamental_units(105, 2) == "1.05"

    def test_pads_small_values(self):
        """Should pad values smaller than one unit."""
        assert from_fundamental_units(5, 8) == "0.00000005"

    def test_zero_decimals(self):
        """Should return the bare integer with 0 decimals."""
        assert from_fundamental_units(5, 0) == "5"

    def test_negative_value(self):
        """Should keep the sign in front."""
        assert from_fundamental_units(-105, 2) == "-1.05"
