"""Rendering helpers for the price table and chart axis."""

import math
from collections.abc import Sequence

from auction.exceptions import InvalidMagnitudeError
from auction.models import ChartScale


def minimum_fraction_digits(number: str, digits_limit: int) -> int:
    """Fraction digits needed for integer plus fraction digits to reach ``digits_limit``."""
    integer_part = number.split(".")[0]
    return max(digits_limit - len(integer_part), 0)


def _round_to_nearest(value: float, factor: float) -> float:
    return math.floor(value / factor + 0.5) * factor


def calculate_min_max(values: Sequence[float]) -> ChartScale:
    """Chart bounds padded 10% each way and rounded to a tenth of the max's magnitude.

    Raises:
        ValueError: If values is empty.
        InvalidMagnitudeError: If the padded maximum is not positive.
    """
    if not values:
        raise ValueError("calculate_min_max requires at least one value")

    min_raw = min(values) * 0.9
    max_raw = max(values) * 1.1
    if max_raw <= 0:
        raise InvalidMagnitudeError(f"Cannot scale a chart with maximum {max(values)!r}")

    magnitude = 10 ** math.floor(math.log10(max_raw))
    factor = magnitude / 10

    return ChartScale(
        min_value=_round_to_nearest(math.floor(min_raw), factor),
        max_value=_round_to_nearest(math.ceil(max_raw), factor),
    )


def format_amount(value: float | None, max_fraction_digits: int, min_fraction_digits: int = 2) -> str:
    """Format a display value with grouped thousands and bounded fraction digits.

    At least ``min_fraction_digits`` are shown; further digits up to
    ``max_fraction_digits`` appear only when non-zero.
    """
    if value is None:
        return "-"
    upper = max(max_fraction_digits, min_fraction_digits)
    text = f"{value:,.{upper}f}"
    if "." not in text:
        return text
    whole, fraction = text.split(".")
    fraction = fraction.rstrip("0").ljust(min_fraction_digits, "0")
    return f"{whole}.{fraction}" if fraction else whole
