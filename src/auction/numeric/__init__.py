"""Numeric core -- fixed-point conversion, step quantization, digit limits and display precision."""

from auction.numeric.converter import (
    DEFAULT_ASSET_DECIMALS,
    get_decimals,
    price_from_raw,
    price_to_raw,
    volume_from_raw,
    volume_to_raw,
)
from auction.numeric.digits import clamp_fractional_input, is_within_digit_limit
from auction.numeric.display import calculate_min_max, format_amount, minimum_fraction_digits
from auction.numeric.normalize import fix_decimal, to_canonical_decimal_text, to_decimal
from auction.numeric.precision import add_decimal, infer_precision
from auction.numeric.quantizer import (
    step_size_for,
    volume_step_size,
    volume_step_size_decimals,
)

__all__ = [
    "DEFAULT_ASSET_DECIMALS",
    "add_decimal",
    "calculate_min_max",
    "clamp_fractional_input",
    "fix_decimal",
    "format_amount",
    "get_decimals",
    "infer_precision",
    "is_within_digit_limit",
    "minimum_fraction_digits",
    "price_from_raw",
    "price_to_raw",
    "step_size_for",
    "to_canonical_decimal_text",
    "to_decimal",
    "volume_from_raw",
    "volume_step_size",
    "volume_step_size_decimals",
    "volume_to_raw",
]
