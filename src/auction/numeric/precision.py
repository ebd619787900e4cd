"""Display precision inferred from a batch of price history rows.

For each quantity class (price, base volume, quote volume) the batch-wide
hint is the largest ``first_significant_fraction_index + significant_digits``
over all rows, so the smallest value in the batch still shows
``significant_digits`` digits past its first non-zero fraction digit.
"""

import dataclasses
from collections.abc import Iterable, Sequence

from auction.models import PrecisionHints, PriceHistoryItem
from auction.numeric.normalize import Numeric, to_canonical_decimal_text


def fraction_digits_for(value: Numeric, significant_digits: int) -> int:
    """Fraction digits needed to show ``significant_digits`` past the first non-zero one.

    Zero and integral values need none.
    """
    _, _, fraction = to_canonical_decimal_text(value).partition(".")
    stripped = fraction.lstrip("0")
    if not stripped:
        return 0
    return (len(fraction) - len(stripped)) + significant_digits


def infer_precision(
    records: Iterable[PriceHistoryItem], significant_digits: int
) -> PrecisionHints:
    """Compute per-class fraction digit hints across a batch of rows."""
    price = volume_in_base = volume_in_quote = 0
    for record in records:
        price = max(price, fraction_digits_for(record.price, significant_digits))
        volume_in_base = max(
            volume_in_base, fraction_digits_for(record.volume_in_base, significant_digits)
        )
        volume_in_quote = max(
            volume_in_quote, fraction_digits_for(record.volume_in_quote, significant_digits)
        )
    return PrecisionHints(
        price=price,
        volume_in_base=volume_in_base,
        volume_in_quote=volume_in_quote,
    )


def add_decimal(
    records: Sequence[PriceHistoryItem], significant_digits: int
) -> list[PriceHistoryItem]:
    """Return the rows, in order, carrying the batch-wide precision hints.

    Values are not re-rounded; the hints tell the renderer how many fraction
    digits to show. The input rows are left untouched.
    """
    hints = infer_precision(records, significant_digits)
    return [
        dataclasses.replace(
            record,
            price_decimals=hints.price,
            volume_in_base_decimals=hints.volume_in_base,
            volume_in_quote_decimals=hints.volume_in_quote,
        )
        for record in records
    ]
