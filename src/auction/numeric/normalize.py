"""Decimal parsing and canonical text rendering shared by the numeric core.

Floats are converted through ``str()`` so that a display value such as
0.1 becomes Decimal("0.1") rather than its binary expansion.
"""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation

from auction.exceptions import InvalidMagnitudeError

Numeric = Decimal | float | int | str

_BASE_PRECISION = 28


def to_decimal(value: Numeric) -> Decimal:
    """Convert a numeric value to a finite Decimal.

    Raises:
        InvalidMagnitudeError: If the value is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidMagnitudeError(f"Expected a number, got {value!r}")
    elif isinstance(value, int):
        result = Decimal(value)
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidMagnitudeError(f"Not a number: {value!r}") from exc

    if not result.is_finite():
        raise InvalidMagnitudeError(f"Not a finite number: {value!r}")
    return result


def _strip_fraction_zeros(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def to_canonical_decimal_text(value: Numeric) -> str:
    """Render a number, exponential notation included, as plain decimal text.

    Trailing fractional zeros and a dangling decimal point are removed;
    integer zeros are kept.

    >>> to_canonical_decimal_text(1.5e3)
    '1500'
    >>> to_canonical_decimal_text("1.2E-7")
    '0.00000012'
    """
    return _strip_fraction_zeros(format(to_decimal(value), "f"))


def fix_decimal(number: Numeric | None = None, decimal_places: int | None = None) -> str:
    """Round to ``decimal_places`` fraction digits and trim trailing zeros.

    When rounding leaves an integer although the input had a fraction,
    ``".0"`` is appended so the value still reads as fractional.
    Missing arguments yield "0".
    """
    if number is None or decimal_places is None:
        return "0"

    value = to_decimal(number)
    places = max(decimal_places, 0)
    context = Context(prec=max(_BASE_PRECISION, value.adjusted() + places + 2))
    rounded = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP, context=context)

    fixed = _strip_fraction_zeros(format(rounded, "f"))
    if "." not in fixed and value != value.to_integral_value():
        fixed += ".0"
    return fixed
