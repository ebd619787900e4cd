"""Order volume step sizes derived from a minimum notional and a price.

All calculations use Decimal arithmetic. The step for a pair is the largest
power of ten not exceeding the minimum order size in base units, so a
BTC-like asset at 100 quote with a 10 quote minimum gets a 0.1 step.

Quantization flow (volume_step_size):
1. minimum_order_size = minimum_notional_in_quote / price
2. exponent = -floor(log10(minimum_order_size)), decimal places clamped at 0
3. step = 10 ** -exponent
4. volume = step * round(amount / step), volume_floor = step * floor(amount / step)
5. Both formatted to the asset's own decimal places with fix_decimal
"""

from decimal import ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, Context, Decimal

from auction.exceptions import InvalidMagnitudeError
from auction.models import StepSizeResult
from auction.numeric.converter import price_to_raw
from auction.numeric.normalize import Numeric, fix_decimal, to_decimal

# Step-size decimal places beyond this are treated as a degenerate price.
_MAX_DECIMAL_PLACES = 100

_BASE_PRECISION = 28


def _positive(value: Numeric, name: str) -> Decimal:
    result = to_decimal(value)
    if result <= 0:
        raise InvalidMagnitudeError(f"{name} must be positive, got {value!r}")
    return result


def _floor_log10(value: Decimal) -> int:
    """floor(log10(value)) for a positive Decimal, exact at powers of ten."""
    return value.adjusted()


def step_size_for(price: Numeric, minimum_notional_in_quote: Numeric) -> tuple[Decimal, int]:
    """Return (step_size, decimal_places) for volumes at the given price.

    Raises:
        InvalidMagnitudeError: If price or minimum notional is not positive.
    """
    price_value = _positive(price, "price")
    notional = _positive(minimum_notional_in_quote, "minimum_notional_in_quote")

    minimum_order_size = notional / price_value
    exponent = -_floor_log10(minimum_order_size)
    decimal_places = max(exponent, 0)

    # Whole-number steps for very cheap assets can outgrow the default precision.
    context = Context(prec=max(_BASE_PRECISION, abs(exponent) + 2))
    step = Decimal(1).scaleb(-exponent)
    return step.quantize(Decimal(1).scaleb(-decimal_places), context=context), decimal_places


def volume_step_size(
    price: Numeric,
    amount: Numeric,
    decimals: int,
    minimum_notional_in_quote: Numeric,
) -> StepSizeResult:
    """Quantize an order amount to the step implied by the minimum notional.

    Args:
        price: Display price of the base asset in quote units.
        amount: User-entered base amount (display scale).
        decimals: Decimal places of the base asset, used to format results.
        minimum_notional_in_quote: Smallest order value accepted, in quote units.

    Returns:
        StepSizeResult with the nearest-step and floor-step volumes as text.
    """
    step, decimal_places = step_size_for(price, minimum_notional_in_quote)
    amount_value = to_decimal(amount)

    steps = amount_value / step
    volume = step * steps.to_integral_value(rounding=ROUND_HALF_UP)
    volume_floor = step * steps.to_integral_value(rounding=ROUND_FLOOR)

    return StepSizeResult(
        volume=fix_decimal(volume, decimals),
        volume_floor=fix_decimal(volume_floor, decimals),
        step_size=step,
        decimal_places=decimal_places,
    )


def volume_step_size_decimals(
    price: Numeric,
    step_size: Numeric,
    base_decimals: int,
    quote_decimals: int,
) -> int:
    """Decimal places a base volume may carry for a given quote volume step.

    Args:
        price: Display price of the base asset in quote units.
        step_size: Quote volume step (e.g. 0.01).
        base_decimals: Decimal places of the base asset.
        quote_decimals: Decimal places of the quote asset.

    Returns:
        base_decimals when one raw price unit already covers a quote step,
        otherwise base_decimals reduced by the order of magnitude missing.
    """
    step = _positive(step_size, "step_size")
    _positive(price, "price")

    quote_volume_step = Decimal(10) ** abs(step.log10())
    price_raw = to_decimal(price_to_raw(price, base_decimals, quote_decimals))
    if price_raw == 0:
        raise InvalidMagnitudeError(f"price {price!r} underflows at canister scale")
    ratio = price_raw / quote_volume_step
    if ratio >= 1:
        return base_decimals

    shortfall = int((-ratio.log10()).to_integral_value(rounding=ROUND_DOWN))
    decimal_places = base_decimals - shortfall
    return base_decimals if decimal_places > _MAX_DECIMAL_PLACES else decimal_places
