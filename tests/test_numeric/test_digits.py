"""Tests for significant-digit validation and typed amount clamping."""

from decimal import Decimal

import pytest

from auction.exceptions import InvalidMagnitudeError
from auction.numeric.digits import clamp_fractional_input, is_within_digit_limit


class TestIsWithinDigitLimit:
    """A value passes when it needs no more than digits_limit significant digits."""

    @pytest.mark.parametrize("limit", [1, 5, 10, 18])
    def test_zero_always_passes(self, limit: int) -> None:
        assert is_within_digit_limit(0, limit) is True

    def test_five_digits_fit(self) -> None:
        assert is_within_digit_limit(123.45, 5) is True

    def test_six_digits_do_not_fit(self) -> None:
        assert is_within_digit_limit(123.456, 5) is False

    def test_large_integers(self) -> None:
        assert is_within_digit_limit(1234500, 5) is True
        assert is_within_digit_limit(1234567, 5) is False

    def test_small_fractions(self) -> None:
        assert is_within_digit_limit(0.00012345, 5) is True
        assert is_within_digit_limit(0.000123456, 5) is False

    def test_float_noise_tolerated(self) -> None:
        """0.1 + 0.2 == 0.30000000000000004 still counts as one digit."""
        assert is_within_digit_limit(0.1 + 0.2, 5) is True

    def test_decimal_input(self) -> None:
        assert is_within_digit_limit(Decimal("99999"), 5) is True

    def test_negative_value_rejected(self) -> None:
        with pytest.raises(InvalidMagnitudeError):
            is_within_digit_limit(-1.5, 5)

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(InvalidMagnitudeError):
            is_within_digit_limit(float("inf"), 5)

    def test_non_positive_limit_rejected(self) -> None:
        with pytest.raises(ValueError):
            is_within_digit_limit(1, 0)


class TestClampFractionalInput:
    """Sanitizing free-text amounts never raises."""

    def test_truncates_fraction(self) -> None:
        assert clamp_fractional_input("12.3456", 2) == "12.34"

    def test_extra_points_dropped(self) -> None:
        assert clamp_fractional_input("1.2.3.4", 2) == "1.23"

    def test_zero_digits_drops_fraction(self) -> None:
        assert clamp_fractional_input("12.3456", 0) == "12"

    def test_negative_digits_drops_fraction(self) -> None:
        assert clamp_fractional_input("1.2.3", -1) == "1"

    def test_strips_non_numeric(self) -> None:
        assert clamp_fractional_input("abc12,5.6x7", 1) == "125.6"

    def test_no_rounding(self) -> None:
        assert clamp_fractional_input("0.999", 2) == "0.99"

    def test_partial_input_kept(self) -> None:
        assert clamp_fractional_input("12.", 2) == "12."
        assert clamp_fractional_input(".5", 3) == ".5"

    def test_integer_input_unchanged(self) -> None:
        assert clamp_fractional_input("1500", 4) == "1500"

    @pytest.mark.parametrize("text", ["", "abc", "-", "..."])
    def test_garbage_yields_valid_text(self, text: str) -> None:
        result = clamp_fractional_input(text, 2)
        assert result in ("", ".")
