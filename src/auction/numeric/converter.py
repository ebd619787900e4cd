"""Conversion between ledger fixed-point integers and display-scale values.

The auction canister reports prices and volumes in the smallest unit of the
relevant ledger. Scaling is done with ``Decimal.scaleb`` so that raw values
beyond the 2**53 float range keep their digits until the final ``float()``.

Price convention: the canister's price is scaled by the base asset's
decimals and consumed in the quote asset's frame, so
``display = raw * 10**base_decimals / 10**quote_decimals``.
"""

from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

from auction.exceptions import InvalidMagnitudeError
from auction.models import VolumeConversion
from auction.numeric.normalize import Numeric, to_decimal

# Unresolvable asset metadata scales values down to effectively nothing
# instead of failing the whole render.
DEFAULT_ASSET_DECIMALS = 20

_WIDE = Context(prec=80)


def _non_negative(value: Numeric, name: str) -> Decimal:
    result = to_decimal(value)
    if result < 0:
        raise InvalidMagnitudeError(f"{name} must be non-negative, got {value!r}")
    return result


def get_decimals(asset: Any) -> int:
    """Return the asset's decimal places, or DEFAULT_ASSET_DECIMALS.

    Accepts a token object, a mapping with a "decimals" key, or anything
    else (None, lists) which falls back to the default.
    """
    if asset is None or isinstance(asset, (str, bytes, Sequence)):
        return DEFAULT_ASSET_DECIMALS

    if isinstance(asset, Mapping):
        decimals = asset.get("decimals")
    else:
        decimals = getattr(asset, "decimals", None)

    if isinstance(decimals, int) and not isinstance(decimals, bool):
        return decimals
    return DEFAULT_ASSET_DECIMALS


def price_from_raw(raw_price: Numeric, price_decimals: int, quote_decimals: int) -> float:
    """Convert a canister price to quote units per base unit.

    Args:
        raw_price: Price as reported by the canister (non-negative).
        price_decimals: Decimal places of the base asset.
        quote_decimals: Decimal places of the quote asset.

    Returns:
        The display price; 0.0 when the raw price is zero.
    """
    price = _non_negative(raw_price, "raw_price")
    return float(price.scaleb(price_decimals - quote_decimals, context=_WIDE))


def price_to_raw(price: Numeric, price_decimals: int, quote_decimals: int) -> float:
    """Inverse of ``price_from_raw``: display price back to canister scale."""
    value = _non_negative(price, "price")
    return float(value.scaleb(quote_decimals - price_decimals, context=_WIDE))


def volume_from_raw(
    raw_volume: Numeric, base_decimals: int, price: Numeric
) -> VolumeConversion:
    """Convert a raw base-ledger volume to base and quote display units.

    Both the scaling and the multiplication by price stay in Decimal, so
    the quote volume carries a single float rounding at the very end.

    Args:
        raw_volume: Volume in the base ledger's smallest unit.
        base_decimals: Decimal places of the base asset.
        price: Display price used for the quote volume (0 yields 0).
    """
    volume_in_base = _non_negative(raw_volume, "raw_volume").scaleb(-base_decimals, context=_WIDE)
    volume_in_quote = _WIDE.multiply(volume_in_base, to_decimal(price))
    return VolumeConversion(
        volume_in_base=float(volume_in_base),
        volume_in_quote=float(volume_in_quote),
    )


def volume_to_raw(base_amount: Numeric, base_decimals: int) -> int:
    """Convert a base-unit amount to the ledger's smallest unit, rounding half up."""
    scaled = _non_negative(base_amount, "base_amount").scaleb(base_decimals, context=_WIDE)
    return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))
