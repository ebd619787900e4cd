"""Significant-digit policy checks and free-text amount sanitizing."""

import re
from decimal import ROUND_HALF_UP, Decimal

from auction.exceptions import InvalidMagnitudeError
from auction.numeric.normalize import Numeric, to_decimal

# Absorbs float representation noise (0.1 + 0.2) without accepting a real extra digit.
DIGIT_TOLERANCE = Decimal("1e-10")

_NON_NUMERIC = re.compile(r"[^0-9.]")


def is_within_digit_limit(value: Numeric, digits_limit: int) -> bool:
    """Check that ``value`` needs no more than ``digits_limit`` significant digits.

    The value is scaled so that its last allowed significant digit lands in
    the units place; it passes when the scaled value is an integer within
    DIGIT_TOLERANCE. Zero always passes.

    Raises:
        InvalidMagnitudeError: If value is negative.
        ValueError: If digits_limit is not positive.
    """
    if digits_limit < 1:
        raise ValueError(f"digits_limit must be positive, got {digits_limit}")

    number = to_decimal(value)
    if number < 0:
        raise InvalidMagnitudeError(f"Cannot take log10 of negative value {value!r}")
    if number == 0:
        return True

    magnitude = number.adjusted()
    scaled = number.scaleb(digits_limit - 1 - magnitude)
    nearest = scaled.to_integral_value(rounding=ROUND_HALF_UP)
    return abs(scaled - nearest) < DIGIT_TOLERANCE


def clamp_fractional_input(text: str, max_fractional_digits: int) -> str:
    """Sanitize typed amount text to digits and at most one decimal point.

    Points after the first are dropped, the fraction is truncated (never
    rounded) to ``max_fractional_digits``, and with a non-positive limit the
    fraction and its point are removed. A trailing point is kept so partial
    input such as "12." survives while the user is typing.

    >>> clamp_fractional_input("1.2.3.4", 2)
    '1.23'
    """
    cleaned = _NON_NUMERIC.sub("", text or "")

    whole, point, fraction = cleaned.partition(".")
    fraction = fraction.replace(".", "")

    if max_fractional_digits <= 0:
        return whole
    if not point:
        return whole
    return f"{whole}.{fraction[:max_fractional_digits]}"
